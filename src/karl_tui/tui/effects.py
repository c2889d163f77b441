"""Requests from the editor core to its driver.

The core never blocks on external processes. When it needs the terminal
handed to another program it records an effect; the driver takes it with
`Application.take_effect()`, performs it, and reports the result back.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class LoginRequested:
    """Run `karl --login` in the foreground, then call `Application.login_complete`."""


Effect = LoginRequested
