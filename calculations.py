from collections import namedtuple
import logging

logger = logging.getLogger(__name__)

# Placeholder coordinates (Berlin)
DEFAULT_COORDINATES = (52.5200, 13.4050)

DEFAULT_POSITIONS = {
    'Sun': 25.4,
    'Moon': 12.7
}

DEFAULT_ACTIVATIONS = frozenset([1, 5, 10])

DESCRIPTION = "Активированы ворота 1, 5 и 10. Это указывает на..."

# The four calculation steps the handlers run, in order. Each field is a
# plain callable so a real geocoder or ephemeris can be dropped in.
Pipeline = namedtuple('Pipeline', ['geocoder', 'positions', 'activations', 'description'])


def geocode(location):
    """Get latitude and longitude from location string (fixed stand-in)"""
    logger.debug(f"Geocoding '{location}' -> {DEFAULT_COORDINATES}")
    return DEFAULT_COORDINATES


def calculate_planetary_positions(date, time, lat, lon):
    """Get planet longitudes for a birth moment and place (fixed stand-in)"""
    logger.debug(f"Positions for {date} {time} at {lat}, {lon}")
    return dict(DEFAULT_POSITIONS)


def generate_bodygraph(positions):
    """Map planet positions to the set of activated gates (fixed stand-in)"""
    return set(DEFAULT_ACTIVATIONS)


def get_bodygraph_description(bodygraph):
    return DESCRIPTION


DEFAULT_PIPELINE = Pipeline(
    geocoder=geocode,
    positions=calculate_planetary_positions,
    activations=generate_bodygraph,
    description=get_bodygraph_description,
)


def run_pipeline(pipeline, birth_date, birth_time, location):
    """
    Run geocode -> positions -> activations for one request.

    Returns a dict with the coordinates, positions, activation set and
    description. Rendering is left to the caller.
    """
    logger.info(f"Calculating bodygraph: date='{birth_date}', time='{birth_time}', location='{location}'")

    lat, lon = pipeline.geocoder(location)
    positions = pipeline.positions(birth_date, birth_time, lat, lon)
    bodygraph = pipeline.activations(positions)

    return {
        'coordinates': {'latitude': lat, 'longitude': lon},
        'positions': positions,
        'bodygraph': bodygraph,
        'description': pipeline.description(bodygraph)
    }
