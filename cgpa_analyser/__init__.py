"""
CGPA calculation and planning.

backend_logic  - grade scale, aggregation and the two planners (pure functions)
course_book    - the course list edited by the page
io_csv         - CSV import / export of course lists
"""

__version__ = "1.0.0"
