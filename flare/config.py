"""
FLARE Configuration Management

This module provides configuration management for the FLARE route bundler.
It includes layout hyperparameters, visualization options, color defaults and
runtime configuration loaded from YAML files.
"""

import copy
import math
import os
from typing import Any, Dict, Optional

import yaml

# =============================================================================
# Layout Settings
# =============================================================================


class Settings:
    """Configurable defaults for parsing, bundling and rendering."""

    # --- Data ---
    MAX_TIME: int = 12  # Number of time-slot columns in a walk row

    # --- Canvas ---
    CANVAS_WIDTH: int = 960  # Drawing surface width (pixels)
    CANVAS_HEIGHT: int = 600  # Drawing surface height (pixels)

    # --- Hierarchical route bundling ---
    ROUTE_HYPERPARAMS: Dict[str, Any] = {
        # used to scale airport bubbles
        "airports_scale_exponent": 0.5,  # sqrt scale
        "airports_scale_min": 1,
        "airports_scale_max": 2.5,
        "airports_value_divisor": 100,  # bubble value = outgoing / divisor
        # used to scale number of segments per line
        "segments_scale_domain_min": 0,
        "segments_scale_domain_max": None,  # None = canvas hypotenuse
        "segments_scale_range_min": 3,
        "segments_scale_range_max": 10,
        # settle at a layout faster
        "alpha_decay": 0.1,
        # nearby nodes attract each other
        "force_charge_many_body": 40,
        "force_distance_max": None,  # None = 2 * airports_scale_max
        # edges want to be as short as possible
        # prevents too much stretching
        "force_link_strength": 2,
        "force_link_distance": 0,
        "force_x_strength": None,  # None = no x force
        # flight path style
        "stroke_width": None,  # None = count-based width
        "stroke_opacity": 0.1,
    }

    # --- Walk bundling ---
    WALK_HYPERPARAMS: Dict[str, Any] = {
        "airports_scale_exponent": 0.9,
        "airports_scale_min": 1,
        "airports_scale_max": 2.5,
        "airports_value_divisor": 500,
        "segments_scale_domain_min": 0,
        "segments_scale_domain_max": None,
        "segments_scale_range_min": 3,
        "segments_scale_range_max": 10,
        "alpha_decay": 0.5,
        "force_charge_many_body": None,  # disabled
        "force_distance_max": 0,
        "force_link_strength": 1,
        "force_link_distance": 1,
        "force_x_strength": 0,
        "stroke_width": 5,
        "stroke_opacity": 0.3,
    }

    # --- Visualization ---
    DEFAULT_MAP_STYLE: str = "CartoDB.Positron"  # Base map tile style
    DEFAULT_ZOOM: int = 4  # Initial map zoom level
    MAX_TICKS: int = 300  # Upper bound on simulation ticks per layout
    HOVER_OPACITY: float = 1.0  # Path opacity while hovered
    LABEL_OFFSET_X: float = -80  # Horizontal offset of airport labels


# =============================================================================
# Color Schemes
# =============================================================================


class Colors:
    """Color definitions for visualizations."""

    AIRPORT_COLOR: str = "#3498db"  # Airport bubble fill when CSV has none
    CROSS_CLUSTER_COLOR: str = "black"  # Route between different clusters
    LABEL_COLOR: str = "#333333"  # Airport and month labels


HYPERPARAM_PRESETS: Dict[str, Dict[str, Any]] = {
    "routes": Settings.ROUTE_HYPERPARAMS,
    "walks": Settings.WALK_HYPERPARAMS,
}


# =============================================================================
# Runtime Configuration
# =============================================================================


class Config:
    """
    Runtime configuration manager for FLARE.

    Loads settings from YAML files or uses sensible defaults.
    Provides property-based access to common settings.

    Example:
        >>> config = Config('config.yaml')
        >>> print(f"Reading airports from {config.airports_path}")
        >>> print(f"Segment scale ends at {config.hypotenuse:.1f}")
    """

    def __init__(self, config_path: Optional[str] = None) -> None:
        """
        Initialize configuration.

        Args:
            config_path: Path to YAML configuration file. If None or missing,
                        uses default configuration.
        """
        self.config_path = config_path
        self._config: Dict[str, Any] = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """
        Load configuration from YAML file or return defaults.

        Returns:
            Configuration dictionary
        """
        if self.config_path is None or not os.path.exists(self.config_path):
            return self._get_default_config()

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f)
                if self._validate_config(config):
                    return config
                else:
                    print("⚠️  Invalid config structure, using defaults")
                    return self._get_default_config()
        except (OSError, yaml.YAMLError) as e:
            print(f"⚠️  Could not load config file: {e}")
            return self._get_default_config()

    def _validate_config(self, config: Dict[str, Any]) -> bool:
        """
        Validate configuration structure and required fields.

        Args:
            config: Configuration dictionary to validate

        Returns:
            True if valid, False otherwise
        """
        try:
            # Required: data section
            assert "data" in config
            assert isinstance(config["data"]["airports"], str)
            assert isinstance(config["data"]["flights"], str)

            # Required: canvas section
            assert "canvas" in config
            for key in ("width", "height"):
                value = config["canvas"][key]
                assert isinstance(value, (float, int)) and not isinstance(value, bool)
                assert value > 0

            # Optional: per-mode hyperparameter overrides
            for mode, overrides in (config.get("hyperparams") or {}).items():
                assert mode in HYPERPARAM_PRESETS
                assert isinstance(overrides or {}, dict)

            return True
        except (AssertionError, KeyError, TypeError):
            return False

    def _get_default_config(self) -> Dict[str, Any]:
        """
        Get default configuration.

        Returns:
            Default configuration dictionary
        """
        return {
            "data": {
                "airports": "data/airports.csv",
                "flights": "data/flights.csv",
                "walks": "data/walks.csv",
            },
            "canvas": {
                "width": Settings.CANVAS_WIDTH,
                "height": Settings.CANVAS_HEIGHT,
            },
            "visualization": {
                "style": Settings.DEFAULT_MAP_STYLE,
                "zoom": Settings.DEFAULT_ZOOM,
                "max_ticks": Settings.MAX_TICKS,
            },
            "hyperparams": {"routes": {}, "walks": {}},
            "filters": {
                "drop_without_flights": False,
                "drop_na_state": False,
                "top_airports": None,
            },
        }

    def save_config(self) -> None:
        """
        Save current configuration to YAML file.

        Raises:
            ValueError: If config_path is not set
        """
        if self.config_path is None:
            raise ValueError("Cannot save config: no config_path specified")

        with open(self.config_path, "w", encoding="utf-8") as f:
            yaml.dump(self._config, f, default_flow_style=False)

    # --- Property Accessors ---

    @property
    def airports_path(self) -> str:
        """Get airport CSV source (path or URL)."""
        return self._config["data"]["airports"]

    @property
    def flights_path(self) -> str:
        """Get flight CSV source (path or URL)."""
        return self._config["data"]["flights"]

    @property
    def walks_path(self) -> Optional[str]:
        """Get walk CSV source (path or URL)."""
        return self._config["data"].get("walks")

    @property
    def width(self) -> float:
        return float(self._config["canvas"]["width"])

    @property
    def height(self) -> float:
        return float(self._config["canvas"]["height"])

    @property
    def hypotenuse(self) -> float:
        """Get canvas diagonal, the default upper bound of the segment scale."""
        return math.sqrt(self.width * self.width + self.height * self.height)

    @property
    def map_style(self) -> str:
        return self.get("visualization.style", Settings.DEFAULT_MAP_STYLE)

    @property
    def zoom(self) -> int:
        return int(self.get("visualization.zoom", Settings.DEFAULT_ZOOM))

    @property
    def max_ticks(self) -> int:
        """Get upper bound on force simulation ticks."""
        return int(self.get("visualization.max_ticks", Settings.MAX_TICKS))

    @property
    def filters(self) -> Dict[str, Any]:
        """Get airport filter options."""
        return dict(self._config.get("filters") or {})

    def hyperparams(self, mode: str) -> Dict[str, Any]:
        """
        Get layout hyperparameters for a bundling mode.

        Starts from the mode's preset and applies the YAML overrides under
        ``hyperparams.<mode>``. Derived defaults (segment domain maximum,
        many-body distance cap) are resolved here.

        Args:
            mode: 'routes' or 'walks'

        Returns:
            Hyperparameter dictionary

        Raises:
            ValueError: If mode is unknown
        """
        if mode not in HYPERPARAM_PRESETS:
            raise ValueError(f"Unknown bundling mode: {mode}")

        params = copy.deepcopy(HYPERPARAM_PRESETS[mode])
        params.update(self.get(f"hyperparams.{mode}", {}) or {})

        if params["segments_scale_domain_max"] is None:
            params["segments_scale_domain_max"] = self.hypotenuse
        if params["force_distance_max"] is None:
            params["force_distance_max"] = params["airports_scale_max"] * 2

        return params

    # --- Generic Accessors ---

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value using dot notation.

        Args:
            key: Dot-separated key path (e.g., 'canvas.width')
            default: Default value if key not found

        Returns:
            Configuration value or default

        Example:
            >>> config.get('canvas.width', 960)
            960
        """
        keys = key.split(".")
        value = self._config

        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
                if value is None:
                    return default
            else:
                return default

        return value

    def set(self, key: str, value: Any) -> None:
        """
        Set configuration value using dot notation.

        Args:
            key: Dot-separated key path (e.g., 'canvas.width')
            value: Value to set

        Example:
            >>> config.set('hyperparams.routes.alpha_decay', 0.05)
        """
        keys = key.split(".")
        config = self._config

        # Navigate to parent of target key
        for k in keys[:-1]:
            if config.get(k) is None:
                config[k] = {}
            config = config[k]

        config[keys[-1]] = value
