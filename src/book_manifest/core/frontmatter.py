"""Split and parse YAML front matter at the top of a Markdown file."""

import re
from typing import Any

import yaml

from book_manifest.errors import FrontMatterError

# Opening fence on the first line, closing fence is `---` or `...` on its own line
FRONT_MATTER_PATTERN = re.compile(
    r"\A---[ \t]*\r?\n(?P<yaml>.*?)^(?:---|\.\.\.)[ \t]*(?:\r?\n|\Z)",
    re.MULTILINE | re.DOTALL,
)


def split_front_matter(text: str) -> tuple[str, str]:
    """Return (raw_yaml, body). Raises FrontMatterError if no block is found."""
    text = text.lstrip("\ufeff")
    if not text.startswith("---"):
        raise FrontMatterError("file does not start with a '---' front-matter block")

    match = FRONT_MATTER_PATTERN.match(text)
    if not match:
        raise FrontMatterError("front-matter block is not closed with '---'")

    return match.group("yaml"), text[match.end():]


def parse_front_matter(text: str) -> tuple[dict[str, Any], str]:
    """Parse the front-matter block into a mapping.

    Returns (mapping, body). An empty block yields an empty mapping.
    """
    raw, body = split_front_matter(text)

    try:
        data = yaml.safe_load(raw)
    except (yaml.YAMLError, ValueError) as e:
        # Timestamp-shaped scalars that are not real dates raise a bare ValueError
        mark = getattr(e, "problem_mark", None)
        where = f" (line {mark.line + 2})" if mark is not None else ""
        raise FrontMatterError(f"malformed YAML in front matter{where}") from e

    if data is None:
        return {}, body
    if not isinstance(data, dict):
        raise FrontMatterError(
            f"front matter must be a key/value mapping, got {type(data).__name__}"
        )
    return data, body


def dump_front_matter(data: dict[str, Any], body: str = "") -> str:
    """Serialize a mapping back into a front-matter document."""
    raw = yaml.safe_dump(
        data,
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
    )
    return f"---\n{raw}---\n{body}"
