import logging
from pathlib import Path

from eszett.common import bus
from eszett.config import EszettConfig, load_config_from_path
from eszett.transform import EszettTransformer


def get_project_root() -> Path:
    return Path.cwd()


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def make_config(nested_scopes: bool = False) -> EszettConfig:
    config = load_config_from_path(get_project_root())
    if config.root is not None:
        bus.debug("config.loaded", path=config.root / "pyproject.toml")
    else:
        bus.debug("config.defaults")
    if nested_scopes:
        config.nested_scopes = True
    return config


def make_transformer(config: EszettConfig) -> EszettTransformer:
    return EszettTransformer(config)
