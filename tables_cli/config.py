"""Configuration management for tables-cli."""

import os
from pathlib import Path
from typing import List, Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings


def _find_env_file() -> Optional[str]:
    """Find .env file in multiple locations.

    Search order:
    1. Current working directory
    2. ~/.tables-cli/.env
    """
    if os.path.exists(".env"):
        return ".env"

    user_env = Path.home() / ".tables-cli" / ".env"
    if user_env.exists():
        return str(user_env)

    return None


class Settings(BaseSettings):
    """Settings for one generation run, loaded from TABLES_* environment variables."""

    # Database connection
    db_type: str = Field(default="pg", description="Database type: pg, duckdb, oracle or sqlite3")
    host: str = Field(default="127.0.0.1", description="Database host")
    port: Optional[int] = Field(default=None, description="Database port (default depends on database type)")
    user: Optional[str] = Field(default=None, description="Database user")
    password: Optional[str] = Field(default=None, description="Database password")
    db_name: str = Field(default="postgres", description="Database name, Oracle service name or database file path")
    db_schema: Optional[str] = Field(
        default=None,
        description="Schema (Oracle: owner) to introspect (default depends on database type)"
    )
    socket: Optional[str] = Field(default=None, description="Unix socket directory (PostgreSQL)")
    ssl_mode: str = Field(default="disable", description="SSL mode passed to PostgreSQL")

    # Selection
    tables: List[str] = Field(default_factory=list, description="Only generate structs for these tables")

    # Output
    tags: List[str] = Field(default_factory=lambda: ["db"], description="Ordered list of active tag generators")
    naming: Literal["camel", "original"] = Field(default="camel", description="Naming convention for Go identifiers")
    null_type: Literal["sql", "native", "primitive"] = Field(
        default="sql",
        description="Go type for nullable columns: sql.NullX, pointer or plain type"
    )
    package_name: str = Field(default="dto", description="Go package name of generated files")
    prefix: str = Field(default="", description="Prefix for struct names")
    suffix: str = Field(default="", description="Suffix for struct names")
    output_dir: str = Field(default="./output", description="Directory for generated files")

    verbose: bool = Field(default=False, description="Print extra diagnostics on failure")

    class Config:
        env_prefix = "TABLES_"
        env_file = _find_env_file()
        env_file_encoding = "utf-8"
