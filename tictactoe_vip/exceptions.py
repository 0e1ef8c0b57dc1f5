class InvalidCellIndex(ValueError):
    """
    raised when a move targets a cell outside the 3x3 grid
    """

    def __init__(self, cell_index, *args):
        self.cell_index = cell_index
        super().__init__(*args)

    def __str__(self):
        return f"cell index {self.cell_index} is outside the board (0-8)"
