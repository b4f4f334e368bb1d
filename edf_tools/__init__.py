""" Reader and writer for EDF (European Data Format) recordings. """

from .edf_container import EdfContainer
from .edf_header import EdfHeader
from .edf_reader import EdfReader
from .edf_signal import EdfSignal
from .edf_tools import EdfTools
from .edf_writer import EdfWriter
from .exceptions import EdfError, EdfFormatError
