import json
from urllib.parse import parse_qsl


def decode_params(query_string):
    """Percent-decode a rendered query string into {name: value}."""
    return dict(parse_qsl(query_string, keep_blank_values=True))


def decode_filters(query_string):
    """The `filters` parameter of a rendered query string, as parsed JSON."""
    return json.loads(decode_params(query_string)["filters"])
