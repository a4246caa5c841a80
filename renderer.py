# -*- coding: utf-8 -*-

"""renderer.py:
Turns post metadata and post files into HTML pages.
Templates are plain HTML files filled with str.format; every value is escaped
before it goes into a template, except fragments that are already HTML.
"""

# std libs
import html
import logging
import os
# third party libs
import markdown
# this package
from config import BuildConfig
from data_model import PostMetadata
from post_source import get_post_metadata, get_post, DuplicateSlugError

lg = logging.getLogger(__name__)

TEMPLATE_NAMES = ("layout", "preview", "home", "post", "not_found")
MARKDOWN_EXTENSIONS = ["fenced_code", "tables"]


def post_link(slug: str) -> str:
    return "/posts/" + slug


def load_templates(templates_directory: str) -> dict[str, str]:
    templates = {}
    for name in TEMPLATE_NAMES:
        file_in = os.path.join(templates_directory, name + ".html")
        lg.debug(f"Loading template file from {file_in}")
        with open(file_in, 'rb') as f:
            templates[name] = f.read().decode('utf-8')
    return templates


class BlogRenderer:
    def __init__(self, config: BuildConfig) -> None:
        self.site = config.site
        self.posts_directory = config.paths.posts_input_directory
        self.strict = config.options.strict_metadata
        lg.info(f"Loading templates from {config.paths.templates_directory}")
        self.templates = load_templates(config.paths.templates_directory)

    def render_preview(self, meta: PostMetadata) -> str:
        return self.templates["preview"].format(
            POST_SLUG=html.escape(meta.slug),
            POST_LINK=html.escape(post_link(meta.slug)),
            POST_TITLE=html.escape(meta.title),
            POST_DATE=html.escape(meta.date),
            POST_SUBTITLE=html.escape(meta.subtitle),
        )

    def render_layout(self, children: str, title: str | None = None) -> str:
        """
        Wrap page content between the site header and footer.
        `children` must already be HTML.
        """
        page_title = self.site.title if not title else f"{title} | {self.site.title}"
        return self.templates["layout"].format(
            PAGE_TITLE=html.escape(page_title),
            SITE_TITLE=html.escape(self.site.title),
            SITE_TAGLINE=html.escape(self.site.tagline),
            SITE_FOOTER=html.escape(self.site.footer),
            PAGE_CONTENT=children,
        )

    def render_home(self, posts: list[PostMetadata] | None = None) -> str:
        """
        Render the home page with one preview per post, in the order given.
        Reads the posts directory when no metadata list is passed in.
        """
        if posts is None:
            posts = get_post_metadata(self.posts_directory, strict=self.strict)
        slugs = set()
        previews = []
        for meta in posts:
            if meta.slug in slugs:
                raise DuplicateSlugError(f"Duplicate slug: {meta.slug}")
            slugs.add(meta.slug)
            previews.append(self.render_preview(meta))
        lg.info(f"Rendering home page with {len(previews)} post previews")
        content = self.templates["home"].format(POST_PREVIEWS="\n".join(previews))
        return self.render_layout(content)

    def render_post(self, slug: str) -> str:
        post = get_post(slug, self.posts_directory)
        meta = post.metadata
        lg.info(f"Rendering post {slug}")
        content = self.templates["post"].format(
            POST_SLUG=html.escape(meta.slug),
            POST_TITLE=html.escape(meta.title),
            POST_DATE=html.escape(meta.date),
            POST_SUBTITLE=html.escape(meta.subtitle),
            POST_CONTENT=markdown.markdown(post.content, extensions=MARKDOWN_EXTENSIONS),
        )
        return self.render_layout(content, title=meta.title)

    def render_not_found(self, path: str) -> str:
        content = self.templates["not_found"].format(REQUEST_PATH=html.escape(path))
        return self.render_layout(content, title="Not found")
