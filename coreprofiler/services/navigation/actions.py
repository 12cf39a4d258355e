"""Navigation actions."""

from typing import Any, Mapping

from coreprofiler.engine.events import Event

DEFAULT_HOME_URL = '/wp-admin/admin.php?page=wc-admin'


def redirect_to_home(ctx: Mapping[str, Any], event: Event, runner) -> None:
    """Send the user to the store home screen once the wizard is complete."""
    runner.navigate(runner.get_setting('home_url', DEFAULT_HOME_URL))
