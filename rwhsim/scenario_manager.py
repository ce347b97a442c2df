"""
Rain tank scenario manager. Runs the capacity sweep under modified conditions:

1. Climate (precipitation_factor):
  - Scales every daily precipitation value
  - e.g. 0.8 for a 20% drier climate

2. Household (demand_factor, roof_area_factor):
  - Scales the per capita demand and the per capita roof area
  - e.g. a larger household sharing the same roof has a smaller roof area per capita

Scenarios are read from the 'scenarios' section of the scenario configuration:
- enabled: Run scenarios at all
- active_scenarios: Names of the scenarios to run ('default' runs unmodified)
- <name>: description and the factors above
"""

from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Sequence

import logging
from dynaconf import Dynaconf
import pandas as pd

from rwhsim.data_structures import PhysicalParameters
from rwhsim.water_balance import run_water_balance

logger = logging.getLogger(__name__)

@dataclass
class Scenario:
    """Encapsulates model scenario parameters"""
    name: str
    description: str

    # Climate modifications
    precipitation_factor: float = 1.0

    # Household modifications
    demand_factor: float = 1.0
    roof_area_factor: float = 1.0

    def update_from_dict(self, config_dict):
        """Update variables from config dict"""
        for key, value in config_dict.items():
            if hasattr(self, key):
                setattr(self, key, value)

    def modify_forcing(self, forcing: pd.Series) -> pd.Series:
        """Apply scenario modifications to the precipitation series"""
        modified = forcing.copy()
        modified *= self.precipitation_factor
        return modified

    def modify_params(self, params: PhysicalParameters) -> PhysicalParameters:
        """Apply scenario modifications to the physical parameters"""
        return replace(params,
                       demand=params.demand * self.demand_factor,
                       roof_area=params.roof_area * self.roof_area_factor)

class ScenarioManager:
    """Manages and runs multiple rain tank scenarios"""

    def __init__(self):
        self.scenarios: Dict[str, Scenario] = {}

    @classmethod
    def from_config(cls, config: Dynaconf) -> 'ScenarioManager':
        """Create ScenarioManager from loaded config"""
        manager = cls()

        if not config.scenarios.enabled:
            return manager

        for name in config.scenarios.active_scenarios:
            if name == 'default':
                scenario = Scenario(
                    name=name,
                    description='default'
                )
                manager.add_scenario(scenario)
                continue

            scenario_config = getattr(config.scenarios, name)
            scenario = Scenario(
                name=name,
                description=scenario_config.description
            )
            scenario.update_from_dict(scenario_config)
            manager.add_scenario(scenario)

        return manager

    def add_scenario(self, scenario: Scenario) -> None:
        """Add a scenario to the manager"""
        self.scenarios[scenario.name] = scenario

    def get_scenario(self, name: str) -> Optional[Scenario]:
        """Get a scenario by name"""
        return self.scenarios.get(name)

    def run_scenarios(self, base_params: PhysicalParameters, base_forcing: pd.Series,
                      capacities: Sequence[float], selected: Optional[List[float]] = None, n_jobs: int = -1,
                      progress: bool = False) -> Dict[str, Dict[str, pd.DataFrame]]:
        """Run scenarios one after another, each sweep in parallel"""
        results = {}
        for name, scenario in self.scenarios.items():
            logger.info("Scenario %s: %s", name, scenario.description)
            results[name] = run_water_balance(
                scenario.modify_forcing(base_forcing),
                scenario.modify_params(base_params),
                capacities,
                selected,
                n_jobs=n_jobs,
                progress=progress
            )
        return results
