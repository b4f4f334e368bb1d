""" EDF decoder: header, per-signal metadata and multiplexed data records.

	The data records follow the header. Each record holds, in signal order,
	num_of_samples_per_record[i] little-endian 16 bit integers of every
	signal i:

		| rec 0: sig 0 | sig 1 | ... | rec 1: sig 0 | sig 1 | ... |

	A single signal is read by seeking over the other signals' blocks, so only
	that signal's samples are ever held in memory.

	The EDF IO was inspired by Boris Reuderink's EEGTools:
	https://github.com/breuderink/eegtools/tree/master/eegtools
"""

import io
import re

import numpy as np

from .edf_header import EdfHeader
from .edf_signal import EdfSignal, SAMPLE_DTYPE
from .exceptions import EdfFormatError
from .fields import HEADER_FIELDS, SIGNAL_FIELDS
from .logger import logger

# invariant number grammar, '.' is the only decimal separator
_INT_RE = re.compile(r'^[+-]?\d+$')
_FLOAT_RE = re.compile(r'^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$')


class EdfReader(object):

	def __init__(self, file_obj):
		""" param file_obj: seekable binary stream positioned anywhere """
		self.file_obj = file_obj


	def decodeHeader(self):
		""" Read the fixed header and the per-signal metadata columns.

			returns EdfHeader
			raises EdfFormatError on a truncated or unparsable field
		"""
		logger.debug("Loading EDF headers...")

		f = self.file_obj
		f.seek(0)

		h = EdfHeader()
		for field in HEADER_FIELDS:
			setattr(h, field.name, self._readField(field))

		if h.num_of_bytes_in_header < 0:
			raise EdfFormatError("Negative header size! [num_of_bytes_in_header = {}]".format(h.num_of_bytes_in_header), 'num_of_bytes_in_header')

		if h.num_of_records < 0:
			raise EdfFormatError("Negative number of data records! [num_of_records = {}]".format(h.num_of_records), 'num_of_records')

		if h.num_of_signals < 0:
			h.num_of_signals = 0

		nsr = range(h.num_of_signals)
		for field in SIGNAL_FIELDS:
			setattr(h, field.name, [self._readField(field) for _ in nsr])

		for label, spr in zip(h.labels, h.num_of_samples_per_record):
			if spr < 0:
				raise EdfFormatError("Negative number of samples per record for signal '{}'! [{}]".format(label, spr), 'num_of_samples_per_record', str(spr))

		if f.tell() != h.num_of_bytes_in_header:
			logger.warning(
				"Header size field says %d bytes, %d header bytes were read.",
				h.num_of_bytes_in_header, f.tell()
			)

		logger.debug("Loading EDF headers... OK (%d signals, %d records)", h.num_of_signals, h.num_of_records)

		return h


	def allocateSignals(self, header):
		""" One EdfSignal per header column index, with empty sample buffers. """
		return [EdfSignal.fromHeader(header, i) for i in range(header.num_of_signals)]


	def readSignal(self, header, signal):
		""" Fill one signal by walking the records and skipping the others.

			param header: EdfHeader of this file
			param signal: EdfSignal allocated from the header, its 'index'
				selects the block read in every record
			returns the same signal
		"""
		logger.debug("Loading EDF signal '%s'...", signal.label)

		f = self.file_obj
		f.seek(header.num_of_bytes_in_header)

		spr = header.num_of_samples_per_record
		capacity = header.num_of_records * spr[signal.index]
		signal.reserve(capacity)

		for rec_idx in range(header.num_of_records):
			for sig_idx in range(header.num_of_signals):
				if sig_idx == signal.index:
					signal.appendSamples(self._readSamples(spr[sig_idx], rec_idx, sig_idx))
				else:
					f.seek(spr[sig_idx] * SAMPLE_DTYPE.itemsize, io.SEEK_CUR)

		self._checkCapacity(signal, capacity)

		logger.debug("Loading EDF signal '%s'... OK", signal.label)

		return signal


	def decodeAllSignals(self, header):
		""" Read every signal in a single pass over the data records. """
		logger.debug("Loading EDF data...")

		signals = self.allocateSignals(header)
		capacities = []
		for s in signals:
			capacities.append(header.num_of_records * s.num_of_samples_per_record)
			s.reserve(capacities[-1])

		self.file_obj.seek(header.num_of_bytes_in_header)

		for rec_idx in range(header.num_of_records):
			for s in signals:
				s.appendSamples(self._readSamples(s.num_of_samples_per_record, rec_idx, s.index))

		for s, capacity in zip(signals, capacities):
			self._checkCapacity(s, capacity)

		logger.debug("Loading EDF data... OK")

		return signals


	def readRecord(self, header, rec_idx):
		""" Read a single data record.

			returns a list of numpy int16 arrays, one per signal
		"""
		if not 0 <= rec_idx < header.num_of_records:
			raise IndexError("Record index {} out of range! [num_of_records = {}]".format(rec_idx, header.num_of_records))

		spr = header.num_of_samples_per_record
		record_size = sum(spr) * SAMPLE_DTYPE.itemsize

		self.file_obj.seek(header.num_of_bytes_in_header + rec_idx * record_size)

		return [self._readSamples(n, rec_idx, sig_idx) for sig_idx, n in enumerate(spr)]


	def _readField(self, field):
		raw = self.file_obj.read(field.width)
		if len(raw) != field.width:
			raise EdfFormatError(
				"Unexpected end of EDF file while reading '{}'! [expected {} bytes, got {}]".format(field.name, field.width, len(raw)),
				field.name
			)

		text = raw.decode('ascii', errors='replace').strip()

		if field.kind is int:
			if not _INT_RE.match(text):
				raise EdfFormatError("Field '{}' is not an integer: '{}'".format(field.name, text), field.name, text)
			return int(text)

		if field.kind is float:
			if not _FLOAT_RE.match(text):
				raise EdfFormatError("Field '{}' is not a number: '{}'".format(field.name, text), field.name, text)
			return float(text)

		return text


	def _readSamples(self, n, rec_idx, sig_idx):
		buff = self.file_obj.read(n * SAMPLE_DTYPE.itemsize)

		if len(buff) != n * SAMPLE_DTYPE.itemsize:
			raise EdfFormatError("Unexpected end of EDF file! [record {}, signal {}]".format(rec_idx, sig_idx))

		# 2-byte little endian integer per sample
		return np.frombuffer(buff, dtype=SAMPLE_DTYPE)


	@staticmethod
	def _checkCapacity(signal, capacity):
		if signal.capacity != capacity:
			# the buffer was pre-sized for every record, this should never happen
			logger.error("Sample buffer of signal '%s' was resized during read! [%d -> %d]", signal.label, capacity, signal.capacity)
