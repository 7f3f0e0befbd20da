import math

from flightcalc.models import CanvasPoint, GeoCoordinate

EARTH_RADIUS_KM = 6371.2


def haversine_km(a: GeoCoordinate, b: GeoCoordinate) -> float:
    R = EARTH_RADIUS_KM
    p1, p2 = math.radians(a.lat), math.radians(b.lat)
    dphi = math.radians(b.lat - a.lat)
    dlmbda = math.radians(b.lon - a.lon)
    h = math.sin(dphi/2)**2 + math.cos(p1) * math.cos(p2) * math.sin(dlmbda/2)**2
    h = min(1.0, h)  # rounding can push near-antipodal pairs just past 1
    return 2 * R * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def project(c: GeoCoordinate, width: float, height: float) -> CanvasPoint:
    """
    Equirectangular projection onto a width x height surface:
      x = (lon + 180) * width / 360
      y = (90 - lat) * height / 180
    Linear in both axes, so unproject() inverts it up to float rounding.
    """
    x = (c.lon + 180) * (width / 360)
    y = (90 - c.lat) * (height / 180)
    return CanvasPoint(x=x, y=y)


def unproject(p: CanvasPoint, width: float, height: float) -> GeoCoordinate:
    lon = p.x / (width / 360) - 180
    lat = 90 - p.y / (height / 180)
    return GeoCoordinate(lat=lat, lon=lon)


def midpoint(p1: CanvasPoint, p2: CanvasPoint) -> CanvasPoint:
    return CanvasPoint(x=(p1.x + p2.x) / 2, y=(p1.y + p2.y) / 2)
