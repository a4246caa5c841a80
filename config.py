# -*- coding: utf-8 -*-

"""config.py:
This module defines the data model of config file.
It also provides methods to load config from config file, or dump config to a file.
"""

__version__ = "20240528"

# std libs
import os
import json
# third party libs
from pydantic import BaseModel

# meta params and defaults
CONFIG_PATH = os.path.join(os.path.dirname(__file__), './config.json')
TEMPLATES_PATH = os.path.join(os.path.dirname(__file__), './templates/')


class SiteConfig(BaseModel):
    # shown in the header of every page, links back to home
    title: str = "Jack's Blog"
    tagline: str = "🤟 Welcome to my tech blog. 💻"
    # attribution line in the footer
    footer: str = "Developed by Jack"
    # prefix for permanent links written to sitemap.txt, e.g. https://blog.example.com
    # leave empty to get site-relative links
    web_root: str = ""


class BuildPathConfig(BaseModel):
    # where to find input posts, one <slug>.md file per post
    posts_input_directory: str
    # page templates (layout.html, preview.html, home.html, post.html, not_found.html)
    templates_directory: str = TEMPLATES_PATH
    # where to export build results
    output_directory: str
    # a sitemap.txt is generated, which contains links to all built pages.
    sitemap_output_file: str
    # metadata of all posts, for clients that want the list without parsing HTML
    posts_json_file: str


class BuildOptions(BaseModel):
    # raise on posts with missing metadata instead of skipping them
    strict_metadata: bool = False
    log_level: str = "INFO"


class ServerConfig(BaseModel):
    host: str = "127.0.0.1"
    port: int = 8000


class BuildConfig(BaseModel):
    site: SiteConfig = SiteConfig()
    paths: BuildPathConfig
    options: BuildOptions = BuildOptions()
    server: ServerConfig = ServerConfig()


def load_config_from_file(config_path: str = CONFIG_PATH):
    with open(config_path, 'r', encoding='utf-8') as f:
        r = json.load(f)
    return BuildConfig(**r)


def dump_config_to_file(config: BuildConfig, config_path: str = CONFIG_PATH):
    with open(config_path, 'w+', encoding='utf-8') as f:
        f.write(config.model_dump_json(indent=2))
