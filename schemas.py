# schemas.py

from typing import Any, List, Optional
from pydantic import BaseModel, Field


class SettingsResponse(BaseModel):
    server_root: str
    template_root: str
    template_expander: Optional[str]
    upload_dir: str
    cache_dir: Any
    default_language: Any
    host: Any
    fe_servers: Any
    debug_mode: Any
    primitive_types: Any
    http_port: str
    https_port: str
    project_name: Any
    couchdb_address: Any
    dbms: str
    ecomponents: Any


class ConfigValueResponse(BaseModel):
    key: str
    value: Any


class ReinstallResponse(BaseModel):
    message: str
    path: str
    keys: List[str] = Field(
        default_factory=list,
        description="Keys present in the store after the reload"
    )
