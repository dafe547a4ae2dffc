"""
Form Branching Engine (formflow)

Decides which question of a form is shown next and projects the
expected path through the form for progress display.

ARCHITECTURAL GUARANTEE:
------------------------
The evaluation core (conditions, branching, eligibility) is pure:
    - No I/O
    - No shared mutable state
    - No exceptions escape to the caller

Anything malformed degrades to False, END, or a shorter path.

Loading, rendering and the command line live in outer modules.
"""

__version__ = "0.1.0"
