"""
Pytest configuration and shared fixtures
"""

import logging
import sys
from pathlib import Path

import pytest

# Add repository root to Python path for imports
REPO_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(REPO_ROOT))

from config import BuildConfig, BuildPathConfig, TEMPLATES_PATH  # noqa: E402
from logging_formatter import BlogStreamHandler  # noqa: E402


def write_post(directory, slug, title=None, subtitle=None, date=None, body="Post body."):
    """Write <slug>.md with whichever front matter keys are given."""
    lines = ["---"]
    if title is not None:
        lines.append(f'title: "{title}"')
    if subtitle is not None:
        lines.append(f'subtitle: "{subtitle}"')
    if date is not None:
        lines.append(f'date: "{date}"')
    lines.append("---")
    lines.append("")
    lines.append(body)
    path = Path(directory) / f"{slug}.md"
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def posts_dir(tmp_path):
    """Posts directory holding the two example posts a and b"""
    directory = tmp_path / "posts"
    directory.mkdir()
    write_post(directory, "a", title="Post A", subtitle="s1", date="2023-01-01",
               body="# Heading A\n\nFirst post.")
    write_post(directory, "b", title="Post B", subtitle="s2", date="2023-02-01",
               body="Second post with `code`.")
    return directory


@pytest.fixture
def config(tmp_path, posts_dir):
    dist = tmp_path / "dist"
    return BuildConfig(paths=BuildPathConfig(
        posts_input_directory=str(posts_dir),
        templates_directory=TEMPLATES_PATH,
        output_directory=str(dist),
        sitemap_output_file=str(dist / "sitemap.txt"),
        posts_json_file=str(dist / "posts.json"),
    ))


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Entry points configure the root logger; undo that after each test"""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for h in root.handlers[:]:
        if isinstance(h, BlogStreamHandler) and h not in handlers:
            root.removeHandler(h)
    root.setLevel(level)
