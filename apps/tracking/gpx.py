"""
GPX track codec

Writes stored points as a GPX 1.0 document and reads GPX track points back
into the request parameters the validator understands.
"""
import io
import xml.etree.ElementTree as ET

from django.utils.xmlutils import SimplerXMLGenerator

from .functions import iso_to_millis, is_numeric, millis_to_iso

GPX_NS = 'http://www.topografix.com/GPX/1/0'
CREATOR = 'gps-live-tracking'


def _track_name(user, session):
    return f"user {user} session {session}" if session else f"user {user}"


def write_gpx(points, stream, user='', session=''):
    """
    Serialize points into a GPX document

    Args:
        points: Iterable of Point (already in track order)
        stream: Text stream to write to
        user: Scope user, used for the track name
        session: Scope session, used for the track name
    """
    handler = SimplerXMLGenerator(stream, 'utf-8')
    handler.startDocument()
    handler.startElement('gpx', {'version': '1.0', 'creator': CREATOR, 'xmlns': GPX_NS})
    handler.startElement('trk', {})
    handler.addQuickElement('name', _track_name(user, session))
    handler.startElement('trkseg', {})

    for point in points:
        handler.startElement('trkpt', {'lat': point.lat, 'lon': point.lon})
        handler.addQuickElement('ele', point.alt)
        timestamp = millis_to_iso(point.time)
        if timestamp:
            handler.addQuickElement('time', timestamp)
        # GPX wants decimal degrees, text bearings are left out
        if is_numeric(point.bearing):
            handler.addQuickElement('course', point.bearing)
        handler.addQuickElement('speed', point.speed)
        handler.addQuickElement('hdop', point.hdop)
        handler.endElement('trkpt')

    handler.endElement('trkseg')
    handler.endElement('trk')
    handler.endElement('gpx')
    handler.endDocument()


def render_gpx(points, user='', session=''):
    stream = io.StringIO()
    write_gpx(points, stream, user=user, session=session)
    return stream.getvalue()


def _child_text(element, name):
    child = element.find(f'{{{GPX_NS}}}{name}')
    if child is None:
        child = element.find(name)
    if child is None or child.text is None:
        return ''
    return child.text.strip()


def read_gpx(source):
    """
    Parse GPX track points in document order

    Args:
        source: Path or binary file object

    Returns:
        List of dicts with lat, lon, altitude, timestamp, bearing, speed
        and hdop keys (empty strings when absent)

    Raises:
        xml.etree.ElementTree.ParseError: not a well formed document
    """
    tree = ET.parse(source)
    points = []
    for element in tree.getroot().iter():
        if element.tag not in (f'{{{GPX_NS}}}trkpt', 'trkpt'):
            continue
        points.append({
            'lat': element.get('lat', ''),
            'lon': element.get('lon', ''),
            'altitude': _child_text(element, 'ele'),
            'timestamp': iso_to_millis(_child_text(element, 'time')) or '',
            'bearing': _child_text(element, 'course'),
            'speed': _child_text(element, 'speed'),
            'hdop': _child_text(element, 'hdop'),
        })
    return points
