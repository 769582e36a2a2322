"""University attendance & leave administration.

Feature packages (users, configuration, academics, attendance, leaves, ...)
each carry a dataclass model, a repository Protocol with its MySQL adapter,
a use-case service and a thin Flask controller.
"""
