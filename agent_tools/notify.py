"""Idle-session notification hook.

The host delivers lifecycle events as `{"type": ..., "properties": {...}}`.
When enabled, a `session.idle` event starts one spoken announcement
(`say "Your code is done!"` by default). The announcement process is started
and not waited on; finished processes are reaped on the next event. Spawn
failures are not caught.
"""

import logging
import shutil
import subprocess

from agent_tools import config

logger = logging.getLogger(__name__)

SESSION_IDLE = "session.idle"


class IdleNotifier:
    """Speak a short phrase whenever the host reports an idle session."""

    def __init__(self, enabled=False, message=config.IDLE_MESSAGE, command="say"):
        self.enabled = enabled
        self.message = message
        self.command = command
        self._running = []

    @classmethod
    def from_env(cls):
        notifier = cls(enabled=config.flag_from_env("IDLE_NOTIFY_ENABLED"))
        if notifier.enabled and shutil.which(notifier.command) is None:
            logger.warning("Idle notifications enabled but %r is not on PATH", notifier.command)
        return notifier

    def events(self):
        """Event types this hook subscribes to; none while disabled."""
        return [SESSION_IDLE] if self.enabled else []

    def handle_event(self, event):
        """Return True when the event triggered an announcement."""
        if not self.enabled:
            return False
        if (event or {}).get("type") != SESSION_IDLE:
            return False

        self.reap()
        self._running.append(subprocess.Popen([self.command, self.message]))
        return True

    def reap(self):
        """Collect finished announcements; returns how many are still running."""
        self._running = [proc for proc in self._running if proc.poll() is None]
        return len(self._running)
