"""FastAPI host service that installs and exposes the project configuration."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import Depends, FastAPI, HTTPException

from config import AppConfig, config
from projconf import Configuration, Overrides
from projconf.errors import ConfigParseError, ProjConfError
from schemas import ConfigValueResponse, ReinstallResponse, SettingsResponse

logger = logging.getLogger(__name__)


class ConfigurationService:
    """Application layer façade around :class:`projconf.Configuration`.

    Owns the configuration of this process and keeps FastAPI routes free
    from file handling details.
    """

    def __init__(self, app_config: AppConfig) -> None:
        self._app_config = app_config
        self.configuration = Configuration(
            overrides=Overrides(app_config.override_cells()),
            anchor_package=app_config.anchor_package,
        )

    # ------------------------------------------------------------------ #
    # Lifecycle helpers
    # ------------------------------------------------------------------ #

    def config_path(self) -> Path:
        return self._app_config.config_path or self.configuration.default_path()

    def install(self) -> None:
        """Load the configuration at startup. Failures stop the process."""
        if self._app_config.config_path is not None:
            self.configuration.load(self._app_config.config_path)
        else:
            self.configuration.install()

    def reinstall(self) -> ReinstallResponse:
        try:
            path = self.config_path()
            if self._app_config.config_path is not None:
                self.configuration.load(path)
            else:
                self.configuration.reinstall()
        except FileNotFoundError as exc:
            logger.exception("Reinstall failed, configuration file missing")
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        except ConfigParseError as exc:
            logger.exception("Reinstall failed, configuration file unparsable")
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        except ProjConfError as exc:
            logger.exception("Reinstall failed")
            raise HTTPException(status_code=500, detail=str(exc)) from exc
        return ReinstallResponse(
            message="Configuration reloaded",
            path=str(path),
            keys=self.configuration.store.keys(),
        )

    # ------------------------------------------------------------------ #
    # Delegated lookups
    # ------------------------------------------------------------------ #

    def settings(self) -> SettingsResponse:
        return SettingsResponse(**self.configuration.snapshot())

    def get_value(self, key: str) -> ConfigValueResponse:
        if key not in self.configuration.store:
            raise HTTPException(status_code=404, detail=f"Unknown key: {key}")
        return ConfigValueResponse(key=key, value=self.configuration.get(key))


_service = ConfigurationService(config)


def get_configuration_service() -> ConfigurationService:
    """FastAPI dependency returning the shared configuration service."""
    return _service


@asynccontextmanager
async def lifespan(app: FastAPI):
    get_configuration_service().install()
    yield


app = FastAPI(title="Project Configuration API", lifespan=lifespan)


@app.get("/config", response_model=SettingsResponse)
def settings(
    service: ConfigurationService = Depends(get_configuration_service),
) -> SettingsResponse:
    """Return the effective value of every configuration option."""
    return service.settings()


@app.get("/config/{key}", response_model=ConfigValueResponse)
def get_value(
    key: str,
    service: ConfigurationService = Depends(get_configuration_service),
) -> ConfigValueResponse:
    """Return the raw stored value of one configuration key."""
    return service.get_value(key)


@app.post("/reinstall", response_model=ReinstallResponse)
def reinstall(
    service: ConfigurationService = Depends(get_configuration_service),
) -> ReinstallResponse:
    """Reload the configuration file, replacing every entry."""
    return service.reinstall()


@app.get("/")
def root() -> dict[str, str]:
    """Simple health endpoint for convenience."""
    return {"message": "Project configuration API. See /docs for Swagger UI."}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app:app", host="0.0.0.0", port=8000, reload=True)
