"""
This module provides byte streams backed by hardware interfaces, currently
serial ports (UART, USB CDC virtual serial) using PySerial as the driver.
"""

# .py files
from .UartStream import *
