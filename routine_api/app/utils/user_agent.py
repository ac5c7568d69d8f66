"""User‑agent parsing for the login activity entry."""

from dataclasses import dataclass
from typing import Optional

from user_agents import parse as parse_user_agent


@dataclass
class DeviceInfo:
    os_name: str
    os_version: str
    browser_name: str
    browser_version: str

    @property
    def os_label(self) -> str:
        return f"{self.os_name}-{self.os_version}" if self.os_version else self.os_name

    @property
    def browser_label(self) -> str:
        if self.browser_version:
            return f"{self.browser_name}-{self.browser_version}"
        return self.browser_name


def parse_device(user_agent_str: Optional[str]) -> DeviceInfo:
    """Split a user‑agent header into OS and browser name/version."""
    if not user_agent_str:
        return DeviceInfo("Unknown OS", "", "Unknown Browser", "")
    ua = parse_user_agent(user_agent_str)
    return DeviceInfo(
        os_name=ua.os.family,
        os_version=ua.os.version_string,
        browser_name=ua.browser.family,
        browser_version=ua.browser.version_string,
    )
