"""Profile loader for document calculation defaults."""

import yaml
from pathlib import Path
from typing import Dict, Any, List
from dataclasses import dataclass, field


@dataclass
class ProfileConfig:
    """Configuration profile for quote/invoice defaults."""
    name: str
    description: str = ""
    default_vat_rate: float = 20.0
    currency: str = "EUR"
    default_unit: str = "unite"
    vat_rates: List[float] = field(default_factory=lambda: [0.0, 5.5, 10.0, 20.0])
    amount_decimals: int = 2

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ProfileConfig':
        """Create ProfileConfig from dictionary."""
        return cls(
            name=data.get('name', 'default'),
            description=data.get('description', ''),
            default_vat_rate=data.get('default_vat_rate', 20.0),
            currency=data.get('currency', 'EUR'),
            default_unit=data.get('default_unit', 'unite'),
            vat_rates=list(data.get('vat_rates', [0.0, 5.5, 10.0, 20.0])),
            amount_decimals=int(data.get('amount_decimals', 2)),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'name': self.name,
            'description': self.description,
            'default_vat_rate': self.default_vat_rate,
            'currency': self.currency,
            'default_unit': self.default_unit,
            'vat_rates': list(self.vat_rates),
            'amount_decimals': self.amount_decimals,
        }


def get_profiles_dir() -> Path:
    """Get directory containing profile YAML files.

    Returns:
        Path to profiles directory
    """
    # invoice_totals/config/profile_loader.py -> invoice_totals/config -> invoice_totals -> root
    project_root = Path(__file__).resolve().parent.parent.parent
    return project_root / "configs" / "profiles"


def load_profile(profile_name: str = "default") -> ProfileConfig:
    """Load a configuration profile.

    Args:
        profile_name: Name of profile to load (without .yaml extension)

    Returns:
        ProfileConfig object

    Raises:
        FileNotFoundError: If profile file doesn't exist
        ValueError: If profile file is invalid
    """
    profile_path = get_profiles_dir() / f"{profile_name}.yaml"

    if not profile_path.exists():
        raise FileNotFoundError(f"Profile not found: {profile_name} (expected at {profile_path})")

    try:
        with open(profile_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in profile {profile_name}: {e}") from e

    if not data:
        raise ValueError(f"Profile file is empty: {profile_path}")
    if not isinstance(data, dict):
        raise ValueError(f"Profile {profile_name} must be a mapping, got {type(data).__name__}")

    try:
        return ProfileConfig.from_dict(data)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Error loading profile {profile_name}: {e}") from e


def list_available_profiles() -> List[str]:
    """List all available profile names (without .yaml extension)."""
    profiles_dir = get_profiles_dir()

    if not profiles_dir.exists():
        return ["default"]

    profiles = [profile_file.stem for profile_file in profiles_dir.glob("*.yaml")]
    return sorted(profiles) if profiles else ["default"]


def get_default_profile() -> ProfileConfig:
    """Get default profile (always available)."""
    try:
        return load_profile("default")
    except FileNotFoundError:
        return ProfileConfig(name="default", description="Default configuration")
