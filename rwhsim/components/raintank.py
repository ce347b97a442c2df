from rwhsim.data_structures import PhysicalParameters, DailyRecord
from rwhsim.utils import BaseUnit


def water_balance_step(previous: float, precipitation: float, params: PhysicalParameters,
                       capacity: float, day: int = 1) -> DailyRecord:
    """
    Calculates the daily water balance of a rain tank.

    Inflows: Roof runoff after first flush diversion and filter loss
    Outflows: Served demand, overflow

    Args:
        previous (float): Storage at the end of the previous day [m³]
        precipitation (float): Daily precipitation [mm]
        params (PhysicalParameters): Catchment and demand constants
            roof_area: Roof area per capita [m²]
            runoff_coefficient: Fraction of precipitation running off the roof [-]
            first_flush: First flush diversion depth [mm]
            filter_loss: Water lost in the (mesh) filter [-]
            demand: Daily water demand per capita [m³]
        capacity (float): Storage capacity per capita [m³]
        day (int): Day number, starting at 1

    Returns:
        DailyRecord with:
            inflow: Volume entering the tank [m³]
            served: Volume supplied to the household [m³]
            stored: Storage at the end of the day [m³]
            overflow: Volume lost because the tank is full [m³]
            demand_met: Demand was fully supplied
            demand_failed: No water at all was supplied

    Notes:
        - Runoff smaller than the first flush volume is fully diverted
        - A tank that overflows ends the day exactly at capacity
    """
    roof_runoff = BaseUnit.convert(precipitation, BaseUnit.MILLIMETER, BaseUnit.CUBIC_METER,
                                   params.roof_area) * params.runoff_coefficient
    first_flush = BaseUnit.convert(params.first_flush, BaseUnit.MILLIMETER, BaseUnit.CUBIC_METER,
                                   params.roof_area)

    inflow = 0.0
    if roof_runoff >= first_flush:
        inflow = (1 - params.filter_loss) * (roof_runoff - first_flush)

    available = previous + inflow
    served = min(available, params.demand)

    demand_met = served == params.demand
    demand_failed = not demand_met and served == 0

    overflow = max(0.0, available - served - capacity)
    stored = capacity if overflow > 0 else available - served

    return DailyRecord(
        day=day,
        capacity=capacity,
        inflow=inflow,
        served=served,
        stored=stored,
        overflow=overflow,
        demand_met=demand_met,
        demand_failed=demand_failed
    )
