import argparse
import json
import os
import shutil
import sys
import logging
# This package
from config import load_config_from_file, BuildConfig, CONFIG_PATH
from logging_formatter import setup_logging
from post_source import get_post_metadata, BlogError
from renderer import BlogRenderer, post_link

# configure logger for this module.
lg = logging.getLogger(__name__)


class BlogBuilder:
    def __init__(self, config: BuildConfig) -> None:
        self.config = config
        self.pcfg = config.paths
        self.renderer = BlogRenderer(config)

    def write_page(self, file_out: str, page: str) -> None:
        lg.info(f"Writing HTML source to {file_out}")
        os.makedirs(os.path.dirname(file_out) or ".", exist_ok=True)
        with open(file_out, 'wb') as f:
            f.write(page.encode('utf-8'))

    def build_site(self) -> list[str]:
        lg.warning("Start to build the site...")
        lg.info(f"Scanning for posts from {self.pcfg.posts_input_directory}")
        posts = get_post_metadata(self.pcfg.posts_input_directory,
                                  strict=self.config.options.strict_metadata)
        lg.debug("Posts found: ")
        for meta in posts:
            lg.debug(meta.slug)

        web_root = self.config.site.web_root.rstrip("/")
        sitemap = [web_root + "/"]
        self.write_page(os.path.join(self.pcfg.output_directory, "index.html"),
                        self.renderer.render_home(posts))

        posts_out = os.path.join(self.pcfg.output_directory, "posts")
        if os.path.exists(posts_out):
            lg.warning(
                f"Directory {posts_out} already exists, deleting it before building posts.")
            shutil.rmtree(posts_out)
        os.makedirs(posts_out, exist_ok=True)
        for meta in posts:
            lg.warning(f"Building post {meta.slug}")
            self.write_page(os.path.join(posts_out, meta.slug + ".html"),
                            self.renderer.render_post(meta.slug))
            sitemap.append(web_root + post_link(meta.slug))

        self.write_page(os.path.join(self.pcfg.output_directory, "404.html"),
                        self.renderer.render_not_found("/404.html"))
        lg.warning(f"All {len(posts)} posts built.")

        lg.info(f"Writing sitemap.txt to {self.pcfg.sitemap_output_file}")
        os.makedirs(os.path.dirname(self.pcfg.sitemap_output_file) or ".", exist_ok=True)
        with open(self.pcfg.sitemap_output_file, 'wb') as f:
            f.write('\n'.join(sitemap).encode('utf-8'))

        lg.info(f"Writing post information to {self.pcfg.posts_json_file}")
        os.makedirs(os.path.dirname(self.pcfg.posts_json_file) or ".", exist_ok=True)
        with open(self.pcfg.posts_json_file, 'wb') as f:
            f.write(json.dumps([meta.model_dump() for meta in posts],
                               indent=2, ensure_ascii=False).encode('utf-8'))
        return sitemap


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Build the static blog site.")
    parser.add_argument("--config", default=CONFIG_PATH, help="path to config.json")
    parser.add_argument("--strict", action="store_true",
                        help="fail on posts with missing or invalid metadata")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    args = parser.parse_args(argv)

    setup_logging("DEBUG" if args.verbose else "INFO")
    if not os.path.isfile(args.config):
        lg.error(f"Config file {args.config} not found, pass one with --config")
        return 1
    config = load_config_from_file(args.config)
    if args.strict:
        config.options.strict_metadata = True
    setup_logging("DEBUG" if args.verbose else config.options.log_level)
    lg.info(f"Config loaded from {args.config}")

    try:
        BlogBuilder(config).build_site()
    except (BlogError, OSError) as e:
        lg.error(f"Build failed: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
