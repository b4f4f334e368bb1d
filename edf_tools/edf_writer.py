""" EDF encoder.

	Writes an EdfHeader and its EdfSignal list in the layout EdfReader reads:
	fixed header, per-signal metadata column by column, then num_of_records
	data records with every signal's block in signal order.
"""

import math

import numpy as np

from .edf_signal import SAMPLE_DTYPE
from .exceptions import EdfFormatError
from .fields import HEADER_FIELDS, HEADER_SIZE, SIGNAL_FIELDS, SIGNAL_HEADER_SIZE
from .logger import logger

# num_of_bytes_in_header is an unsigned 16 bit value
MAX_HEADER_SIZE = 0xFFFF
MAX_SIGNALS = (MAX_HEADER_SIZE - HEADER_SIZE) // SIGNAL_HEADER_SIZE


def formatField(field, value):
	""" ASCII bytes of a value, space padded or truncated to the field width.

		Replacement characters left by EdfReader for undecodable bytes are
		written back as '?'.

		param field: fields.Field
		param value: str, int or float depending on field.kind
		returns bytes of exactly field.width length
	"""
	if field.kind is int:
		text = str(int(value))
	elif field.kind is float:
		text = formatFloat(value, field.name)
	else:
		text = '' if value is None else str(value).replace('\ufffd', '?')

	try:
		data = text.encode('ascii')
	except UnicodeEncodeError:
		raise EdfFormatError("Field '{}' must be ASCII text: '{}'".format(field.name, text), field.name, text)

	return data[:field.width].ljust(field.width, b' ')


def formatFloat(value, name = None):
	""" Shortest decimal text of a float, integral values without fraction ('1', '-44'). """
	value = float(value)
	if not math.isfinite(value):
		raise EdfFormatError("Field '{}' must be a finite number: {}".format(name, value), name, str(value))

	return np.format_float_positional(value, trim='-')


class EdfWriter(object):

	def __init__(self, file_obj):
		""" param file_obj: writable binary stream """
		self.file_obj = file_obj


	def encode(self, header, signals):
		""" Write a complete EDF file.

			The header size and the per-signal header columns are derived
			values: they are recomputed from 'signals' and stored back into
			'header'. Every check and every header field is done before the
			first byte is written, a failing encode leaves the stream and the
			header untouched.

			param header: EdfHeader
			param signals: list of EdfSignal, one per header.num_of_signals
			raises EdfFormatError if the signal count or a sample count does
				not match the header, or a field can't be written as ASCII
		"""
		num_of_signals = len(signals)

		if num_of_signals != header.num_of_signals:
			raise EdfFormatError(
				"Header declares {} signals but {} were given!".format(header.num_of_signals, num_of_signals),
				'num_of_signals'
			)

		header_size = HEADER_SIZE + SIGNAL_HEADER_SIZE * num_of_signals
		if header_size > MAX_HEADER_SIZE:
			raise EdfFormatError(
				"Too many signals, the header would be {} bytes! [num_of_signals = {}, max {}]".format(header_size, num_of_signals, MAX_SIGNALS),
				'num_of_signals'
			)

		for s in signals:
			needed = header.num_of_records * s.num_of_samples_per_record
			if len(s) < needed:
				raise EdfFormatError("Signal '{}' has {} samples, {} records need {}!".format(s.label, len(s), header.num_of_records, needed))
			if len(s) > needed:
				logger.warning("Signal '%s' has %d samples, only the first %d are written.", s.label, len(s), needed)

		logger.debug("Writing EDF headers...")

		chunks = []
		for field in HEADER_FIELDS:
			value = header_size if field.name == 'num_of_bytes_in_header' else getattr(header, field.name)
			chunks.append(formatField(field, value))

		for field in SIGNAL_FIELDS:
			chunks.append(b''.join(formatField(field, s.getColumnValue(field.name)) for s in signals))

		header.setSignalColumns(signals)
		header.num_of_bytes_in_header = header_size

		f = self.file_obj
		f.write(b''.join(chunks))

		logger.debug("Writing EDF headers... OK (%d bytes)", header_size)
		logger.debug("Writing EDF data...")

		for rec_idx in range(header.num_of_records):
			blocks = []
			for s in signals:
				n = s.num_of_samples_per_record
				blocks.append(s.samples[rec_idx*n:(rec_idx+1)*n].astype(SAMPLE_DTYPE, copy=False).tobytes())
			f.write(b''.join(blocks))

		logger.debug("Writing EDF data... OK (%d records)", header.num_of_records)
