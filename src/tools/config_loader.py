"""
Configuration loader for clustering profiles and environment variables.
"""

import logging
import os
from pathlib import Path
from typing import Dict, Any, List, Optional, Union
import yaml

from src.clustering.config import DBSCANConfig


logger = logging.getLogger(__name__)

PROFILE_ENV_VAR = "DBSCAN_PROFILE"
DEFAULT_PROFILE = "default"


class ConfigLoader:
    """Load and manage clustering configuration from YAML files and environment."""
    
    CONFIG_DIR = Path(__file__).parent.parent.parent / "configs"
    
    @classmethod
    def available_profiles(cls) -> List[str]:
        """Names of the profiles in ``CONFIG_DIR``."""
        return sorted(f.stem for f in cls.CONFIG_DIR.glob("*.yaml"))
    
    @classmethod
    def load_profile(cls, profile_name: str = DEFAULT_PROFILE) -> Dict[str, Any]:
        """
        Load a clustering profile.
        
        Args:
            profile_name: Name of the profile (default, dense, sparse)
            
        Returns:
            Dictionary with configuration values
            
        Raises:
            FileNotFoundError: If profile doesn't exist
        """
        profile_path = cls.CONFIG_DIR / f"{profile_name}.yaml"
        
        if not profile_path.exists():
            available = cls.available_profiles()
            raise FileNotFoundError(
                f"Profile '{profile_name}' not found. Available profiles: {', '.join(available)}"
            )
        
        logger.debug(f"Loading clustering profile '{profile_name}' from {profile_path}")
        with open(profile_path, "r") as f:
            return yaml.safe_load(f) or {}
    
    @classmethod
    def get_profile_from_env(cls) -> Optional[str]:
        """Get profile name from the DBSCAN_PROFILE environment variable."""
        return os.getenv(PROFILE_ENV_VAR)
    
    @classmethod
    def load_default_or_env_profile(cls) -> DBSCANConfig:
        """
        Load the profile named by the environment or the default profile.
        
        Returns:
            Validated DBSCANConfig
        """
        profile = cls.get_profile_from_env() or DEFAULT_PROFILE
        return DBSCANConfig.from_dict(cls.load_profile(profile))


def load_config(path: Union[str, Path]) -> DBSCANConfig:
    """
    Load a DBSCANConfig from an explicit YAML file.
    
    Raises:
        FileNotFoundError: If the file doesn't exist
        ConfigurationError: If the values are invalid
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    
    with open(path, "r") as f:
        data = yaml.safe_load(f) or {}
    return DBSCANConfig.from_dict(data)


def save_config(config: DBSCANConfig, path: Union[str, Path]) -> str:
    """Write ``config`` to a YAML file and return the path."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        yaml.dump(config.to_dict(), f, default_flow_style=False, sort_keys=False)
    return str(path)


def get_config() -> DBSCANConfig:
    """Convenience function to get current configuration."""
    return ConfigLoader.load_default_or_env_profile()
