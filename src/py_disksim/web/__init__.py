"""Browser-facing JSON API for the disk scheduling simulator.

This package provides a Flask application that exposes the simulator
over HTTP.  It is an **optional** extra — install with::

    pip install py-disksim[web]

The ``create_app`` factory in ``app.py`` builds one ``Simulation`` and
serves three endpoints:

- ``GET /api/config`` — disk geometry and default workload size.
- ``POST /api/simulate`` — run every policy and return the results.
- ``GET /api/log`` — the simulation log collected so far.
"""
