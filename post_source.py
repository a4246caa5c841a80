# -*- coding: utf-8 -*-

"""post_source.py:
Reads blog posts from the posts directory.
Each post is a markdown file named <slug>.md with a YAML front matter block
holding title, subtitle and date.
"""

# std libs
import logging
import os
# third party libs
import frontmatter
from frontmatter.default_handlers import YAMLHandler
import yaml
from pydantic import ValidationError
# this package
from data_model import PostMetadata, Post, SLUG_RE

lg = logging.getLogger(__name__)

POST_EXTENSION = ".md"
TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


class DisplayStringLoader(yaml.SafeLoader):
    """SafeLoader that leaves dates as they are written in the file"""


DisplayStringLoader.yaml_implicit_resolvers = {
    first: [r for r in resolvers if r[0] != TIMESTAMP_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


class DisplayStringYAMLHandler(YAMLHandler):
    def load(self, fm, **kwargs):
        return yaml.load(fm, Loader=DisplayStringLoader)


class BlogError(Exception):
    pass


class MetadataError(BlogError):
    pass


class DuplicateSlugError(MetadataError):
    pass


class PostNotFoundError(BlogError):
    def __init__(self, slug: str) -> None:
        super().__init__(f"No post with slug {slug!r}")
        self.slug = slug


def _describe_validation_error(e: ValidationError) -> str:
    problems = []
    for err in e.errors():
        field = ".".join(str(x) for x in err["loc"]) or "metadata"
        problems.append(f"{field}: {err['msg']}")
    return "; ".join(problems)


def load_post(post_file: str) -> Post:
    """
    Parse one post file into metadata and markdown body.
    Raises MetadataError when the front matter is unreadable or incomplete.
    """
    slug = os.path.basename(post_file)[:-len(POST_EXTENSION)]
    try:
        parsed = frontmatter.load(post_file, handler=DisplayStringYAMLHandler())
    except (yaml.YAMLError, ValueError, TypeError) as e:
        raise MetadataError(f"Cannot parse front matter of {post_file}: {e}") from e
    try:
        meta = PostMetadata(slug=slug, **{k: parsed.metadata.get(k)
                                          for k in ("title", "subtitle", "date")
                                          if k in parsed.metadata})
    except ValidationError as e:
        raise MetadataError(
            f"Invalid metadata in {post_file}: {_describe_validation_error(e)}") from e
    return Post(metadata=meta, content=parsed.content)


def _list_post_files(posts_directory: str) -> list[str]:
    names = [name for name in os.listdir(posts_directory)
             if name.endswith(POST_EXTENSION) and len(name) > len(POST_EXTENSION)]
    return [os.path.join(posts_directory, name) for name in sorted(names)
            if os.path.isfile(os.path.join(posts_directory, name))]


def get_post_metadata(posts_directory: str, strict: bool = False) -> list[PostMetadata]:
    """
    Collect the metadata of every post in posts_directory, newest first.
    Posts with the same date are ordered by slug.
    Files with broken metadata are skipped with a warning, or raise MetadataError if strict.
    """
    if not os.path.isdir(posts_directory):
        lg.warning(f"Posts directory {posts_directory} not found, no posts loaded.")
        return []

    metadata = []
    for post_file in _list_post_files(posts_directory):
        try:
            metadata.append(load_post(post_file).metadata)
        except MetadataError as e:
            if strict:
                raise
            lg.warning(f"Skipping post: {e}")

    seen = set()
    for meta in metadata:
        # slugs differing only in case collide as output file names
        key = meta.slug.lower()
        if key in seen:
            raise DuplicateSlugError(f"Duplicate slug: {meta.slug}")
        seen.add(key)

    metadata.sort(key=lambda m: m.slug)
    metadata.sort(key=lambda m: m.date, reverse=True)
    lg.debug(f"Loaded metadata of {len(metadata)} posts from {posts_directory}")
    return metadata


def get_post(slug: str, posts_directory: str) -> Post:
    """
    Look up a single post by slug, as used by the /posts/{slug} route.
    """
    if not SLUG_RE.fullmatch(slug):
        raise PostNotFoundError(slug)
    post_file = os.path.join(posts_directory, slug + POST_EXTENSION)
    if not os.path.isfile(post_file):
        raise PostNotFoundError(slug)
    return load_post(post_file)
