"""dagscope view: the live graph view and its terminal presentation.

Modules
-------
live_view
    ``LiveGraphView`` owns the graph engine and applies each delivered
    ``Snapshot`` as a full replace, re-running layout and fit.
renderer
    ``DagRenderer`` turns the view into Rich renderables, including
    continuous ``Rich.Live`` mode driven by a ``LiveQuery``.
"""
