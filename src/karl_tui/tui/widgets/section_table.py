"""Section table widget for the configuration editor."""

from textual.widgets import DataTable


class SectionTable(DataTable):
    """DataTable subclass for displaying the items of one section.

    The Application owns the selection, so the table never takes focus and
    only mirrors the selected row with its cursor.
    """

    def __init__(self, *, id: str | None = None) -> None:
        super().__init__(id=id, cursor_type="row", zebra_stripes=True)
        self.can_focus = False

    def populate(
        self, columns: tuple[str, ...], rows: list[tuple[str, ...]], selection: int | None
    ) -> None:
        """Replace columns and rows, then move the cursor to the selected row.

        Args:
            columns: Column labels
            rows: Cell values, one tuple per visible item in display order
            selection: Index of the selected row, or None for no selection
        """
        self.clear(columns=True)
        self.add_columns(*columns)
        for row in rows:
            self.add_row(*row)
        if selection is not None:
            self.move_cursor(row=selection)
