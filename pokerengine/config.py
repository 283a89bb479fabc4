"""Engine configuration."""
import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()


@dataclass
class Config:
    """Engine defaults loaded from environment variables."""
    
    # Table defaults (used when a table is created without explicit values)
    starting_stack: int = int(os.getenv("STARTING_STACK", "5000"))
    big_blind: int = int(os.getenv("BIG_BLIND", "100"))
    max_players: int = int(os.getenv("MAX_PLAYERS", "9"))
    
    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO")


config = Config()
