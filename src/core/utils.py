def quote_arg(value: str) -> str:
    """
    Wrap a command argument in the protocol's double-quoted string syntax.
    Backslashes and double quotes are escaped with a backslash.
    """
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def split_first_tab(row: str) -> tuple[str, str] | None:
    """
    Split an "artist<TAB>title" row on the first tab only.
    Returns None when the row has no tab.
    """
    head, sep, rest = row.partition("\t")
    if not sep:
        return None
    return head, rest


def format_track_number(raw: str | None) -> str | None:
    """
    "3/12" -> "03". A head that is not a number renders as "00",
    an empty head yields None.
    """
    if raw is None:
        return None
    head = raw.split("/")[0].strip()
    if not head:
        return None
    try:
        return f"{int(head):02d}"
    except ValueError:
        return "00"
