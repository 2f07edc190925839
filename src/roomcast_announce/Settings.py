import copy
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import tomllib
import tomli_w


@dataclass(frozen=True)
class Credentials:
    url: str
    username: str
    token: str


class Settings:
    DEFAULTS: Dict[str, Any] = {
        "announce": {
            "interval": 15,
            "port_mapping": True,
            "port_description": "Roomcast Room",
        },
        "web_service": {
            "url": "",
            "username": "",
            "token": "",
        },
    }

    def __init__(self, path: Optional[str] = None) -> None:
        self.path = Path(path) if path else None
        self.settings: Dict[str, Any] = {}
        self.load()

    def load(self) -> None:
        if self.path and self.path.exists():
            with self.path.open("rb") as file:
                raw = tomllib.load(file)
                self.settings = self._merge(copy.deepcopy(self.DEFAULTS), raw)
        else:
            self.settings = copy.deepcopy(self.DEFAULTS)

    def save(self) -> None:
        if self.path is None:
            raise ValueError("Settings have no file to save to")

        with self.path.open("wb") as f:
            f.write(tomli_w.dumps(self.settings).encode("utf-8"))

    def get(self, key: str, default: Any = None) -> Any:
        return self.settings.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self.settings[key] = value

    def credentials(self) -> Credentials:
        web_service = self.get("web_service", {})

        return Credentials(
            url=web_service.get("url", ""),
            username=web_service.get("username", ""),
            token=web_service.get("token", "")
        )

    def announce_interval(self) -> float:
        interval = float(self.get("announce", {}).get("interval", 15))
        if interval <= 0:
            raise ValueError(f"Invalid announce interval: {interval}")

        return interval

    def _merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        for key, value in override.items():
            if (
                key in base
                and isinstance(base[key], dict)
                and isinstance(value, dict)
            ):
                base[key] = self._merge(base[key], value)
            else:
                base[key] = value
        return base
