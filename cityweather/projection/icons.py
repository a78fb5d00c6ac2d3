"""Weather code to icon category."""

from cityweather.models.forecast import IconCategory


def classify(code: int) -> IconCategory:
    """Map an Open-Meteo weather code to an icon category.

    Codes 0-3 land in CLOUD because of the ``<= 3`` branch; kept as is so
    cards match the existing front end.
    """
    if code >= 80:
        return IconCategory.STORM
    if code >= 51 or code <= 3:
        return IconCategory.CLOUD
    return IconCategory.CLEAR
