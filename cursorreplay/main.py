"""CursorReplay — cursor trail overlay and auto-framing camera for screen videos.

Runs the app from the source tree: ``python main.py [video] [events]``.
"""

from cursor_replay.launcher import main


if __name__ == "__main__":
    main()
