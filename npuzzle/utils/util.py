from collections.abc import Iterable, Sequence

HIGHLIGHT_COLOR = (230, 200, 60)


def parse_int_sequence(text: str) -> list[int]:
    """
    Parse a whitespace-separated sequence of integers, e.g. ``"1 2 3 0"``.
    Empty input yields an empty list.
    """
    return [int(token) for token in text.split()]


def format_int_sequence(values: Iterable[int]) -> str:
    """Inverse of :func:`parse_int_sequence`."""
    return " ".join(str(int(v)) for v in values)


def grid_visualize_format(side_size: int, num_rows: int, cell_width: int = 1) -> str:
    """
    Build a box-drawing format string for a ``num_rows x side_size`` board.

    The string holds ``num_rows * side_size`` ``{}`` slots, filled row-major.
    Each slot must receive a string already padded to ``cell_width``.
    """
    bar = "━" * (cell_width + 2)
    form = "┏" + "┳".join([bar] * side_size) + "┓\n"
    for i in range(num_rows):
        form += "┃" + "┃".join([" {:s} "] * side_size) + "┃\n"
        if i != num_rows - 1:
            form += "┣" + "╋".join([bar] * side_size) + "┫\n"
    form += "┗" + "┻".join([bar] * side_size) + "┛"
    return form


def tile_to_char(tile: int, cell_width: int = 1, highlight: Sequence[int] = ()) -> str:
    """
    Render one cell. The empty tile is blank, negative values (cells without
    a position) are dotted and tiles in ``highlight`` are coloured.
    """
    if tile < 0:
        return "·".rjust(cell_width)
    if tile == 0:
        return " " * cell_width
    text = str(tile).rjust(cell_width)
    if tile in highlight:
        return coloring_str(text, HIGHLIGHT_COLOR)
    return text


def coloring_str(string: str, color: tuple[int, int, int]) -> str:
    r, g, b = color
    return f"\x1b[38;2;{r};{g};{b}m{string}\x1b[0m"
