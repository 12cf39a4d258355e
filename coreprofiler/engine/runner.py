"""ActionRunner interface - all side effects go here."""

import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_COUNTRIES_PATH = Path(__file__).parent.parent / "data" / "countries.yaml"


class ActionRunner(ABC):
    """Interface for executing side effects."""

    @abstractmethod
    def get_option(self, name: str) -> Any:
        """Read a stored option (None if unset)."""
        pass

    @abstractmethod
    def update_options(self, options: Dict[str, Any]) -> None:
        """Write options to the option store."""
        pass

    @abstractmethod
    def get_countries(self) -> List[Dict[str, Any]]:
        """Return the country list: ``[{code, name, states: [{code, name}]}]``."""
        pass

    @abstractmethod
    def set_tracking_enabled(self, enabled: bool) -> None:
        """Switch usage tracking on or off for the current session."""
        pass

    @abstractmethod
    def record_event(self, name: str, properties: Optional[Dict[str, Any]] = None) -> None:
        """Record an analytics event (fire-and-forget)."""
        pass

    @abstractmethod
    def navigate(self, url: str) -> None:
        """Send the user to another page."""
        pass

    @abstractmethod
    def get_setting(self, name: str, default: Any = None) -> Any:
        """Read a host setting (e.g., 'wc_version')."""
        pass

    @abstractmethod
    def display(self, message: str) -> None:
        """Display a message to the user.

        Args:
            message: Text to display (may contain newlines)
        """
        pass

    @abstractmethod
    def get_input(self, prompt: str, default: Any = None) -> Any:
        """Get input from user.

        Args:
            prompt: Question to ask user
            default: Default value if user presses Enter (shown in [brackets])

        Returns:
            User's input string (or default if empty)
        """
        pass


class RealActionRunner(ActionRunner):
    """Real implementation - actually does things."""

    def __init__(self, settings=None, verbose: bool = False):
        """Initialize with settings and optional verbose mode.

        Args:
            settings: ProfilerSettings instance (default: load_settings())
            verbose: If True, echo side effects to stdout
        """
        if settings is None:
            from coreprofiler.config import load_settings
            settings = load_settings()
        self.settings = settings
        # PROFILER_VERBOSE is parsed into settings.verbose by load_settings()
        self.verbose = verbose or settings.verbose
        self.tracking_enabled = self.get_option('woocommerce_allow_tracking') == 'yes'
        self.current_url: Optional[str] = None

    def _read_options(self) -> Dict[str, Any]:
        path = self.settings.options_path
        if not os.path.exists(path):
            return {}
        with open(path, 'r') as f:
            return yaml.safe_load(f) or {}

    def get_option(self, name: str) -> Any:
        return self._read_options().get(name)

    def update_options(self, options: Dict[str, Any]) -> None:
        # Deep merge: update existing options with new values
        merged = self._deep_merge(self._read_options(), options)

        with open(self.settings.options_path, 'w') as f:
            yaml.safe_dump(merged, f)

        if self.verbose:
            print(f"[VERBOSE] Updated options in {self.settings.options_path}: {options}")

    def _deep_merge(self, base: dict, update: dict) -> dict:
        """Deep merge update dict into base dict.

        Args:
            base: Base dictionary
            update: Dictionary with updates to merge

        Returns:
            Merged dictionary
        """
        result = base.copy()

        for key, value in update.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                # Recursively merge nested dictionaries
                result[key] = self._deep_merge(result[key], value)
            else:
                # Overwrite with new value
                result[key] = value

        return result

    def get_countries(self) -> List[Dict[str, Any]]:
        path = Path(self.settings.countries_path or DEFAULT_COUNTRIES_PATH)
        if not path.exists():
            raise FileNotFoundError(f"Country list not found: {path}")

        with open(path, 'r') as f:
            data = yaml.safe_load(f) or {}

        return data.get('countries', [])

    def set_tracking_enabled(self, enabled: bool) -> None:
        self.tracking_enabled = enabled
        logger.info(f"Usage tracking {'enabled' if enabled else 'disabled'}")

    def record_event(self, name: str, properties: Optional[Dict[str, Any]] = None) -> None:
        if not self.tracking_enabled:
            logger.debug(f"Tracking disabled, not recording {name}")
            return
        logger.info(f"Recorded event {name} {properties or {}}")
        if self.verbose:
            print(f"[VERBOSE] Event: {name} {properties or {}}")

    def navigate(self, url: str) -> None:
        self.current_url = url
        self.display(f"Redirecting to {url}")

    def get_setting(self, name: str, default: Any = None) -> Any:
        return getattr(self.settings, name, default)

    def display(self, message: str) -> None:
        """Print message to stdout."""
        print(message)

    def get_input(self, prompt: str, default: Any = None) -> Any:
        """Read from stdin with optional default."""
        # Format default for display
        if default is not None:
            # Special formatting for boolean defaults
            if isinstance(default, bool):
                default_display = 'y/N' if not default else 'Y/n'
            else:
                default_display = str(default)

            full_prompt = f"{prompt} [{default_display}]: "
            response = input(full_prompt).strip()
            print()  # Add newline after user input

            # Return response or default
            if response:
                return response
            return str(default) if not isinstance(default, bool) else default

        full_prompt = f"{prompt}: "
        response = input(full_prompt).strip()
        print()  # Add newline after user input
        return response


class MockActionRunner(ActionRunner):
    """Mock for testing - records calls."""

    def __init__(self):
        self.calls = []
        self.responses = {}
        self.input_queue = []  # Pre-scripted user inputs for testing
        self.settings = {'wc_version': '7.9.0', 'loader_seconds': 0, 'home_url': '/wp-admin/admin.php?page=wc-admin'}

    def _respond(self, key: str, default: Any = None) -> Any:
        """Return a scripted response; exception instances are raised."""
        response = self.responses.get(key, default)
        if isinstance(response, BaseException):
            raise response
        return response

    def get_option(self, name: str) -> Any:
        self.calls.append(('get_option', name))
        return self._respond('options', {}).get(name)

    def update_options(self, options: Dict[str, Any]) -> None:
        self.calls.append(('update_options', options))

    def get_countries(self) -> List[Dict[str, Any]]:
        self.calls.append(('get_countries',))
        return self._respond('countries', [])

    def set_tracking_enabled(self, enabled: bool) -> None:
        self.calls.append(('set_tracking_enabled', enabled))

    def record_event(self, name: str, properties: Optional[Dict[str, Any]] = None) -> None:
        self.calls.append(('record_event', name, properties))

    def navigate(self, url: str) -> None:
        self.calls.append(('navigate', url))

    def get_setting(self, name: str, default: Any = None) -> Any:
        return self.settings.get(name, default)

    def display(self, message: str) -> None:
        """Capture display call for test verification."""
        self.calls.append(('display', message))

    def get_input(self, prompt: str, default: Any = None) -> Any:
        """Return next value from input_queue."""
        self.calls.append(('get_input', prompt, default))

        # Pop next scripted response
        if self.input_queue:
            response = self.input_queue.pop(0)
            # Match RealActionRunner: apply default if response is empty
            return response if response else (default if default is not None else '')

        # Fall back to default or empty string
        return default if default is not None else ''

    def calls_to(self, method: str) -> List[tuple]:
        """Recorded calls of one runner method."""
        return [c for c in self.calls if c[0] == method]
