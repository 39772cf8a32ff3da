from .logging_mixin import LoggingMixin, configure_logging, configure_logging_from_env

__all__ = ["LoggingMixin", "configure_logging", "configure_logging_from_env"]
