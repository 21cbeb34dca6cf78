"""HTTP front end for the simulator.

This package provides a Flask application that runs simulations on
request.  It is an **optional** extra — install with::

    pip install pagesim[web]

The ``create_app`` factory in ``app.py`` serves two endpoints:

- ``GET /api/policies`` — list the selectable policy names.
- ``POST /api/simulate`` — replay a trace and return the tallies.
"""
