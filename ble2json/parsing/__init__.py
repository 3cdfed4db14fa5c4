"""
This package contains all modules related to parsing and decoding data
received from BLE sensor advertisements.

Sub-packages handle specific data formats:

- ``ruuvi``: Ruuvi data format 3 and 5 payloads and the reading wire format.
"""
