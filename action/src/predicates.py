"""Content predicate library.

Reusable text predicates applied to raw file content. Every function reads the
file fresh and lets read errors (FileNotFoundError, PermissionError, ...)
propagate to the caller.
"""

import re
from pathlib import Path
from typing import Iterator


def read_content(file_path: str | Path) -> str:
    """Read a file as UTF-8 text."""
    return Path(file_path).read_text(encoding="utf-8")


def contains(file_path: str | Path, text: str) -> bool:
    """Check whether the file contains an exact substring."""
    return text in read_content(file_path)


def matches_pattern(file_path: str | Path, pattern: str) -> bool:
    """Check whether a regex matches anywhere in the file.

    ``^`` and ``$`` anchor at line boundaries.
    """
    return re.search(pattern, read_content(file_path), re.MULTILINE) is not None


def count_occurrences(file_path: str | Path, text: str) -> int:
    """Count non-overlapping occurrences of a substring."""
    return read_content(file_path).count(text)


def extract_named_blocks(file_path: str | Path, keyword: str) -> Iterator[str]:
    """Yield the names of ``<keyword> "<name>" {`` blocks in order.

    The file is read when iteration starts; call again to re-scan.
    """
    pattern = re.compile(rf'\b{re.escape(keyword)}\s+"([^"]+)"\s*\{{')
    for match in pattern.finditer(read_content(file_path)):
        yield match.group(1)


def extract_outputs(file_path: str | Path) -> list[str]:
    """Extract output names from an outputs.tf file."""
    return list(extract_named_blocks(file_path, "output"))


def count_resources(file_path: str | Path, resource_type: str) -> int:
    """Count ``resource "<type>" "<name>" {`` declarations."""
    pattern = rf'\bresource\s+"{re.escape(resource_type)}"\s+"[^"]+"\s*\{{'
    return len(re.findall(pattern, read_content(file_path)))


def extract_assignment(file_path: str | Path, name: str) -> str | None:
    """Get the value of the first ``name = value`` line.

    Surrounding quotes are trimmed. Returns None if no such line exists.
    """
    pattern = rf'^\s*{re.escape(name)}\s*=\s*(.+?)\s*$'
    match = re.search(pattern, read_content(file_path), re.MULTILINE)
    if match is None:
        return None
    return match.group(1).strip("\"' ")


def find_block_body(content: str, open_brace: int) -> str:
    """Return the text enclosed by the brace at ``open_brace``.

    Braces inside string literals and ``#`` / ``//`` comments are ignored.
    An unterminated block extends to the end of the content.
    """
    depth = 0
    in_string = False
    i = open_brace
    while i < len(content):
        char = content[i]
        if in_string:
            if char == "\\":
                i += 2
                continue
            if char == '"':
                in_string = False
        elif char == '"':
            in_string = True
        elif char == "#" or content.startswith("//", i):
            newline = content.find("\n", i)
            if newline == -1:
                break
            i = newline
            continue
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return content[open_brace + 1 : i]
        i += 1
    return content[open_brace + 1 :]


def iter_block_bodies(content: str, header_pattern: str) -> Iterator[str]:
    """Yield the body of every block whose header matches ``header_pattern``.

    The pattern must end right before the opening brace.
    """
    for match in re.finditer(header_pattern + r"\s*\{", content):
        yield find_block_body(content, match.end() - 1)


def _declaration_bodies(file_path: str | Path, block_type: str, name: str) -> Iterator[str]:
    header = rf'\b{re.escape(block_type)}\s+"{re.escape(name)}"'
    return iter_block_bodies(read_content(file_path), header)


def has_validation_for_field(file_path: str | Path, field_name: str) -> bool:
    """Check whether ``variable "<field_name>"`` contains a validation block."""
    return any(
        re.search(r"\bvalidation\s*\{", body)
        for body in _declaration_bodies(file_path, "variable", field_name)
    )


def has_description_block(file_path: str | Path, block_type: str, name: str) -> bool:
    """Check whether a named declaration has a non-empty description."""
    return any(
        re.search(r'\bdescription\s*=\s*("[^"\n]+"|<<-?\w+)', body)
        for body in _declaration_bodies(file_path, block_type, name)
    )
