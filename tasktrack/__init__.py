"""TaskTrack backend - task tracking with a task-aware study assistant."""

__version__ = "0.1.0"
