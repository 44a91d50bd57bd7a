from __future__ import annotations

ELLIPSIS = "..."


def pad_end(text: str, width: int, fill: str = " ") -> str:
    """Pads *text* on the right with *fill* until it is at least *width* characters long."""

    if len(text) >= width:
        return text
    return text + fill * (width - len(text))


def truncate_with_ellipsis(text: str, max_length: int) -> str:
    """Cuts *text* to at most *max_length* characters. If the text has to be cut and there is enough room, the last
    three characters are replaced by an ellipsis."""

    if len(text) <= max_length:
        return text
    if max_length > len(ELLIPSIS):
        return text[: max_length - len(ELLIPSIS)] + ELLIPSIS
    return text[: max(0, max_length)]


def quote_names(names: list[str] | tuple[str, ...]) -> str:
    """Formats a list of names as `"a", "b", "c"`."""

    return ", ".join(f'"{name}"' for name in names)
