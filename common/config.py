"""Configuration management for the terminal checklist."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class ChecklistConfig:
    """Configuration settings for the terminal checklist."""
    
    # Directory holding the key-value store
    db_path: str = "exdb"
    
    # Logging
    log_level: str = "WARNING"
    log_file: Optional[str] = None
    
    # Add-view text input
    placeholder: str = "Do the thing"
    char_limit: int = 156
    input_width: int = 20


# Default configuration instance
default_config = ChecklistConfig()
