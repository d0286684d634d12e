from .todos import Todo as Todo
