"""
Logo Replay
===========

Replays the history of a live logo as a scrubbable timeline.

The viewer fetches the full history of logo snapshots from a remote history
service, keeps it fresh with a periodic re-fetch, and plays it back on a timer
or lets the user scrub through it with a slider.

Components:
    - history: HTTP client, JSON codec and status store
    - playback: cursor transitions and the timer-driven controller
    - view: derived view values and the HTML page
    - startup: initial flags from the viewer URL

Example:
    python -m logo_replay --url "http://localhost:8080/?play=true"
"""

__version__ = "0.1.0"

__all__ = [
    "__version__",
]
