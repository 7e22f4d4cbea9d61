"""URI algebra for schema identifiers.

Identifiers are combined the way JSON Schema uses them: absolute `http`,
`https` and `file` URIs stand on their own, fragment-only references
replace the fragment of the base, and relative paths are joined onto the
directory of the base and canonicalized.
"""

import os
import posixpath
import re
from typing import List, Optional, Tuple, Union
from urllib.parse import urlsplit

Text = Union[str, bytes]

_SEPARATORS = re.compile(r"[\\/]")
_SCHEME_PREFIXES = (("file", "file://"), ("https", "https://"), ("http", "http://"))


def _to_text(value: Text) -> str:
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return value


def is_absolute_id(uri: Text) -> bool:
    """Return True for absolute http(s) URIs with a host and for file URIs."""
    parts = urlsplit(_to_text(uri))
    scheme = parts.scheme.lower()
    if scheme in ("http", "https"):
        return bool(parts.netloc)
    return scheme == "file"


def split_fragment(uri: Text) -> Tuple[str, Optional[str]]:
    """Split `uri` on its first '#' into (base, pointer).

    The pointer is None when the URI has no fragment marker at all.
    """
    base, sep, fragment = _to_text(uri).partition("#")
    return base, (fragment if sep else None)


def combine_id(base: Optional[Text], ref: Optional[Text]) -> Optional[str]:
    """Resolve identifier `ref` against the base identifier `base`.

    Args:
        base: Currently active identifier, or None when undefined
        ref: Identifier or reference to resolve, or None

    Returns:
        The combined identifier. `base` when `ref` is None, `ref` itself
        when it is absolute or when there is no base to resolve against.

    Raises:
        ValueError: If a '..' segment climbs above the root of the base
    """
    if ref is None:
        return _to_text(base) if base is not None else None
    ref = _to_text(ref)
    if is_absolute_id(ref):
        return ref
    if base is None:
        return ref
    return _combine_relative_id(_to_text(base), ref)


def _combine_relative_id(base: str, ref: str) -> str:
    if ref.startswith("#"):
        return split_fragment(base)[0] + ref

    ref_path, sep, fragment = ref.partition("#")
    suffix = sep + fragment
    if not ref_path:
        return split_fragment(base)[0] + suffix

    parts = urlsplit(base)
    scheme = parts.scheme.lower()

    # Network-path reference: keep only the base scheme
    if urlsplit(ref_path).netloc:
        if scheme not in ("http", "https"):
            scheme = "file"
        return canonical_path(f"{scheme}:{ref_path}") + suffix

    if scheme in ("http", "https"):
        if ref_path.startswith("/"):
            joined = parts.netloc + ref_path
        else:
            directory = posixpath.dirname(parts.path).rstrip("/")
            joined = f"{parts.netloc}{directory}/{ref_path}"
        return canonical_path(joined, f"{scheme}:") + suffix

    if scheme == "file":
        directory = posixpath.dirname(parts.netloc + parts.path)
        joined = posixpath.join(directory, ref_path)
        return canonical_path(joined, "file:") + suffix

    # Bare paths are file paths relative to the working directory
    directory = posixpath.dirname(split_fragment(base)[0])
    joined = posixpath.join(directory, ref_path) if directory else ref_path
    if not posixpath.isabs(joined):
        joined = posixpath.join(os.getcwd(), joined)
    return canonical_path(joined, "file:") + suffix


def canonical_path(path: Text, scheme_hint: Optional[str] = None) -> str:
    """Return `path` as a canonical URI with '.' and '..' segments removed.

    The scheme comes from the path itself when it carries one, otherwise
    from `scheme_hint` ("file:", "http:" or "https:"). Without either the
    path is taken as a local file path and made absolute.

    Raises:
        ValueError: If a '..' segment has no preceding segment to remove
    """
    path = _to_text(path)
    scheme = None
    for name, prefix in _SCHEME_PREFIXES:
        if path.startswith(prefix):
            scheme, path = name, path[len(prefix) :]
            break

    if scheme is None:
        hint = (scheme_hint or "").lower()
        for name, _ in _SCHEME_PREFIXES:
            if hint.startswith(f"{name}:"):
                scheme = name
                break

    if scheme is None:
        scheme = "file"
        if not os.path.isabs(path):
            path = os.path.join(os.getcwd(), path)

    if scheme == "file":
        tokens = _raw_canonical_path(path, anchored=path.startswith(("/", "\\")))
        body = "/".join(token for token in tokens if token)
        if tokens and tokens[0] == "":
            body = "/" + body
        return "file://" + body

    # The host is the first token and cannot be removed by '..'
    tokens = _raw_canonical_path(path, anchored=True)
    return f"{scheme}://" + "/".join(tokens)


def _raw_canonical_path(path: str, anchored: bool = False) -> List[str]:
    tokens = _SEPARATORS.split(path)
    acc: List[str] = []
    if anchored and tokens:
        acc.append(tokens.pop(0))
    floor = len(acc)

    for token in tokens:
        if token == ".":
            continue
        if token == "..":
            if len(acc) <= floor:
                raise ValueError(f"Path climbs above its root: {path}")
            acc.pop()
            continue
        acc.append(token)
    return acc
