# -*- coding: utf-8 -*-

"""server.py:
Local preview server. Renders pages on every request straight from the posts
directory, so edits show up on reload without rebuilding.
"""

# std libs
import argparse
import logging
import os
import sys
from http.server import HTTPServer, BaseHTTPRequestHandler
from urllib.parse import urlparse, unquote
# this package
from config import load_config_from_file, BuildConfig, CONFIG_PATH
from logging_formatter import setup_logging
from post_source import PostNotFoundError, BlogError
from renderer import BlogRenderer

lg = logging.getLogger(__name__)


def resolve_route(renderer: BlogRenderer, path: str) -> tuple[int, str]:
    """
    Map a request path to (status, html).
    Unknown posts and unknown paths get the not-found page with status 404.
    """
    path = unquote(urlparse(path).path)
    if path in ("/", "/index.html"):
        return 200, renderer.render_home()

    if path.startswith("/posts/"):
        slug = path[len("/posts/"):]
        if slug.endswith("/"):
            slug = slug[:-1]
        elif slug.endswith(".html"):
            slug = slug[:-len(".html")]
        try:
            return 200, renderer.render_post(slug)
        except PostNotFoundError:
            lg.info(f"No post for slug {slug!r}")

    return 404, renderer.render_not_found(path)


class BlogRequestHandler(BaseHTTPRequestHandler):
    """HTTP handler serving rendered blog pages"""

    renderer: BlogRenderer

    def do_GET(self):
        try:
            status, page = resolve_route(self.renderer, self.path)
        except BlogError as e:
            lg.error(f"Cannot render {self.path}: {e}")
            status, page = 500, self.renderer.render_layout("<p>Internal error</p>")
        except Exception as e:
            lg.exception(f"Unexpected error while rendering {self.path}: {e}")
            status, page = 500, self.renderer.render_layout("<p>Internal error</p>")
        body = page.encode('utf-8')
        self.send_response(status)
        self.send_header('Content-Type', 'text/html; charset=utf-8')
        self.send_header('Content-Length', str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format, *args):
        lg.info("%s - %s", self.address_string(), format % args)


def make_server(config: BuildConfig, host: str | None = None,
                port: int | None = None) -> HTTPServer:
    handler = type("ConfiguredBlogRequestHandler", (BlogRequestHandler,),
                   {"renderer": BlogRenderer(config)})
    address = (host or config.server.host,
               port if port is not None else config.server.port)
    return HTTPServer(address, handler)


def serve(config: BuildConfig, host: str | None = None, port: int | None = None) -> None:
    httpd = make_server(config, host, port)
    host, port = httpd.server_address[:2]
    lg.warning(f"Serving blog preview at http://{host}:{port}/")
    try:
        httpd.serve_forever()
    except KeyboardInterrupt:
        lg.warning("Shutting down preview server")
    finally:
        httpd.server_close()


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Serve a live preview of the blog.")
    parser.add_argument("--config", default=CONFIG_PATH, help="path to config.json")
    parser.add_argument("--host", default=None)
    parser.add_argument("--port", type=int, default=None)
    args = parser.parse_args(argv)

    setup_logging()
    if not os.path.isfile(args.config):
        lg.error(f"Config file {args.config} not found, pass one with --config")
        return 1
    config = load_config_from_file(args.config)
    setup_logging(config.options.log_level)
    serve(config, args.host, args.port)
    return 0


if __name__ == "__main__":
    sys.exit(main())
