from enum import Enum
from typing import Optional, Union

import pint
import pint_pandas

ureg = pint.get_application_registry()
pint_pandas.PintType.ureg = ureg

TO_METER = 0.001

class BaseUnit(Enum):
    """Volume and depth units, converted through cubic meters."""
    CUBIC_METER = 'm3'
    LITER = 'L'
    MILLIMETER = 'mm'

    @staticmethod
    def convert(value: float, from_unit: Union['BaseUnit', str],
                to_unit: Union['BaseUnit', str], area: Optional[float] = None) -> float:
        """Convert between units using cubic meters as the base unit.

        Depths (mm) are turned into volumes over ``area`` [m²].
        """
        if isinstance(from_unit, str):
            from_unit = BaseUnit(from_unit)
        if isinstance(to_unit, str):
            to_unit = BaseUnit(to_unit)

        if from_unit == to_unit:
            return value

        if area is None and BaseUnit.MILLIMETER in (from_unit, to_unit):
            raise ValueError("Area is required for conversions involving depth units")

        match from_unit:
            case BaseUnit.CUBIC_METER:
                value_m3 = value
            case BaseUnit.LITER:
                value_m3 = value * TO_METER
            case BaseUnit.MILLIMETER:
                value_m3 = value * TO_METER * area
            case _:
                raise ValueError(f"Unsupported unit: {from_unit}")

        match to_unit:
            case BaseUnit.CUBIC_METER:
                return value_m3
            case BaseUnit.LITER:
                return value_m3 / TO_METER
            case BaseUnit.MILLIMETER:
                return value_m3 / area / TO_METER
            case _:
                raise ValueError(f"Unsupported conversion target: {to_unit}")
