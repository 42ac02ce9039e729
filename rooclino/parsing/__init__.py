"""
This package contains all modules related to parsing and decoding data
received from the room climate sensor.

Sub-packages handle specific layers:

- ``cbor``: The CBOR item decoder and its value tree.
- ``uplink``: Sensor reading extraction from decoded uplinks.
"""
