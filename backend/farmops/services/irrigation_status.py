from farmops.models.enums import IrrigationStatus


def classify(moisture_deficit: float, warning_threshold: float, critical_threshold: float) -> IrrigationStatus:
    """
    Map a moisture deficit onto NORMAL / WARNING / CRITICAL.

    Boundaries are inclusive on the upper side: a deficit equal to a
    threshold already belongs to that threshold's class. Thresholds are not
    validated; with critical < warning the critical check still wins.
    """
    if moisture_deficit >= critical_threshold:
        return IrrigationStatus.CRITICAL
    if moisture_deficit >= warning_threshold:
        return IrrigationStatus.WARNING
    return IrrigationStatus.NORMAL
