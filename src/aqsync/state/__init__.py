"""State/store layer.

This package is the single source of truth for the dashboard state that
presentation collaborators render: the sector registry, the selected
sector's status and policy, the simulation slot, the metrics history,
the loading flag and the current error message.
"""
