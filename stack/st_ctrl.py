from arrayviz.arr_ctrl import ArrayController
from stack.st_structure import Stack


class StackController(ArrayController):
    """Controller for the stack visualization."""

    TITLE = "Stack"
    STRUCTURE_CLS = Stack
    ADD_LABEL = "Push"
    REMOVE_LABEL = "Pop"
    PEEK_LABEL = "Top"
