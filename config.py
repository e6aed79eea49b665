"""
Central configuration for engine, evaluation and session tunables.
Pydantic models give type-safe configuration management.
"""
from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator


class EngineSettings(BaseModel):
    """Search engine configuration settings."""

    default_depth: int = Field(default=3, ge=1, le=8, description="Default search depth in plies")
    history_size: int = Field(default=2, ge=0, le=16, description="Recent chicken positions remembered to avoid oscillation")

    @field_validator('default_depth', 'history_size', mode='before')
    @classmethod
    def validate_int_fields(cls, v):
        return int(v)


class EvaluationSettings(BaseModel):
    """Heuristic weights. Scores are from the chickens' point of view."""

    alive_weight: float = Field(default=2.0, description="Points per chicken on the board")
    stall_weight: float = Field(default=3.0, description="Points per chicken in the stall")
    stall_bonus: float = Field(default=0.5, description="Extra points per chicken in the stall, added after the base")
    win_score: float = Field(default=1000.0, description="Base score once the stall is full")
    loss_score: float = Field(default=0.0, description="Base score once too few chickens remain")
    danger_penalty: float = Field(default=5.0, ge=0, description="Penalty when the fox has any capture")
    danger_cap: int = Field(default=6, ge=0, description="Maximum number of capture options counted as extra penalty")


class SessionSettings(BaseModel):
    """How a match is played."""

    mode: str = Field(default="one-player", description="one-player, two-players or online")
    human_plays_as: str = Field(default="chicken", description="Side played by the human in one-player mode")

    @field_validator('mode', mode='before')
    @classmethod
    def validate_mode(cls, v):
        valid_modes = ['one-player', 'two-players', 'online']
        v_lower = str(v).lower()
        if v_lower not in valid_modes:
            raise ValueError(f"mode must be one of {valid_modes}")
        return v_lower

    @field_validator('human_plays_as', mode='before')
    @classmethod
    def validate_side(cls, v):
        v_lower = str(v).lower()
        if v_lower not in ('chicken', 'fox'):
            raise ValueError("human_plays_as must be 'chicken' or 'fox'")
        return v_lower


class LoggingSettings(BaseModel):
    """Logging configuration."""

    log_level: str = Field(default="INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR)")

    @field_validator('log_level', mode='before')
    @classmethod
    def validate_log_level(cls, v):
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR']
        v_upper = v.upper() if isinstance(v, str) else str(v).upper()
        if v_upper not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return v_upper


class FoxHensConfig(BaseModel):
    """Main configuration model for the Fox and Hens project."""

    engine: EngineSettings = Field(default_factory=EngineSettings)
    evaluation: EvaluationSettings = Field(default_factory=EvaluationSettings)
    session: SessionSettings = Field(default_factory=SessionSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    version: str = Field(default="1.0.0", description="Configuration version")
    config_file: Optional[str] = Field(default=None, description="Path to config file")

    @classmethod
    def from_env(cls) -> 'FoxHensConfig':
        """Create configuration from environment variables."""
        return cls(
            engine=EngineSettings(
                default_depth=int(os.getenv('FOXHENS_DEPTH', '3')),
                history_size=int(os.getenv('FOXHENS_HISTORY', '2')),
            ),
            session=SessionSettings(
                mode=os.getenv('FOXHENS_MODE', 'one-player'),
                human_plays_as=os.getenv('FOXHENS_HUMAN_SIDE', 'chicken'),
            ),
            logging=LoggingSettings(
                log_level=os.getenv('FOXHENS_LOG_LEVEL', 'INFO'),
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            'engine': self.engine.model_dump(),
            'evaluation': self.evaluation.model_dump(),
            'session': self.session.model_dump(),
            'logging': self.logging.model_dump(),
            'version': self.version,
            'config_file': self.config_file,
        }

    def save_to_file(self, filepath: str) -> None:
        """Save configuration to JSON file."""
        config_dict = self.to_dict()
        config_dict['config_file'] = filepath

        with open(filepath, 'w') as f:
            json.dump(config_dict, f, indent=2)

    @classmethod
    def load_from_file(cls, filepath: str) -> 'FoxHensConfig':
        """Load configuration from JSON file."""
        with open(filepath, 'r') as f:
            data = json.load(f)

        return cls(
            engine=EngineSettings(**data.get('engine', {})),
            evaluation=EvaluationSettings(**data.get('evaluation', {})),
            session=SessionSettings(**data.get('session', {})),
            logging=LoggingSettings(**data.get('logging', {})),
            version=data.get('version', '1.0.0'),
            config_file=filepath,
        )

    def update_from_dict(self, updates: Dict[str, Any]) -> None:
        """Update configuration from dictionary, re-validating touched sections."""
        for section, settings in updates.items():
            if hasattr(self, section) and isinstance(settings, dict):
                section_model = getattr(self, section)
                merged = section_model.model_dump()
                merged.update({k: v for k, v in settings.items() if k in merged})
                setattr(self, section, type(section_model)(**merged))


# Global configuration instance
_config: Optional[FoxHensConfig] = None


def get_config() -> FoxHensConfig:
    """Get or create the global configuration instance."""
    global _config
    if _config is None:
        _config = FoxHensConfig.from_env()
    return _config


def load_config_from_file(filepath: str) -> FoxHensConfig:
    """Load configuration from file and update global instance."""
    global _config
    _config = FoxHensConfig.load_from_file(filepath)
    return _config


def reset_config() -> None:
    """Reset the global configuration to defaults."""
    global _config
    _config = None


def get_engine_settings() -> EngineSettings:
    """Get engine configuration settings."""
    return get_config().engine


def get_evaluation_settings() -> EvaluationSettings:
    """Get heuristic weights."""
    return get_config().evaluation


def get_session_settings() -> SessionSettings:
    """Get session configuration settings."""
    return get_config().session


# Logging level (DEBUG, INFO, WARNING, ERROR)
LOG_LEVEL = os.environ.get("FOXHENS_LOG_LEVEL", "INFO").upper()


def setup_logging(level: Optional[str] = None) -> None:
    """Configure root logging once, controlled by env var FOXHENS_LOG_LEVEL."""
    if getattr(setup_logging, "_configured", False):
        return
    resolved: int = getattr(logging, (level or LOG_LEVEL).upper(), logging.INFO)
    logging.basicConfig(
        level=resolved,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    setup_logging._configured = True  # type: ignore[attr-defined]
