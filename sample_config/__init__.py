from sample_config.settings import AppConfig, get_config, load_config

__all__ = ["AppConfig", "get_config", "load_config"]
