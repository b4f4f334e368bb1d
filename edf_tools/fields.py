""" Fixed-width ASCII fields of the EDF header.

	The same catalog is used for reading and writing, the order of the
	tuples is the order of the fields in the file.

	For the EDF specification see:
	http://www.edfplus.info/specs/edf.html
"""

from collections import namedtuple

Field = namedtuple('Field', ['name', 'width', 'kind'])

# 256 bytes, one value each
HEADER_FIELDS = (
	Field('version', 8, str),
	Field('local_patient_id', 80, str),
	Field('local_recording_id', 80, str),
	Field('start_date', 8, str),
	Field('start_time', 8, str),
	Field('num_of_bytes_in_header', 8, int),
	Field('reserved', 44, str),
	Field('num_of_records', 8, int),
	Field('record_duration', 8, float),
	Field('num_of_signals', 4, int),
)

# 256 bytes per signal, stored column by column
SIGNAL_FIELDS = (
	Field('labels', 16, str),
	Field('transducer_types', 80, str),
	Field('physical_dimension', 8, str),
	Field('physical_min', 8, float),
	Field('physical_max', 8, float),
	Field('digital_min', 8, int),
	Field('digital_max', 8, int),
	Field('prefiltering', 80, str),
	Field('num_of_samples_per_record', 8, int),
	Field('signals_reserved', 32, str),
)

HEADER_SIZE = sum(f.width for f in HEADER_FIELDS)
SIGNAL_HEADER_SIZE = sum(f.width for f in SIGNAL_FIELDS)

_CATALOG = dict((f.name, f) for f in HEADER_FIELDS + SIGNAL_FIELDS)


def getField(name):
	return _CATALOG[name]


def width(name):
	""" Byte width of a header field, raises KeyError for unknown names. """
	return _CATALOG[name].width
