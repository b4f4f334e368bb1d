""" The recording-level EDF header and its per-signal metadata columns.

	The per-signal metadata is stored as the file stores it: one list per
	field, each list indexed by the signal number (0..num_of_signals-1).
	An EdfSignal copies one index out of these lists, see
	EdfHeader.signalMetadata().

	Note that the header should *not* require all fields to be set and it
	does not validate on assignment, validation happens when reading
	(EdfReader) and when deriving values from it.
"""

import datetime
import re

from .exceptions import EdfFormatError
from .fields import HEADER_SIZE, SIGNAL_HEADER_SIZE, SIGNAL_FIELDS

_START_RE = re.compile(r'^(\d{2})\.(\d{2})\.(\d{2}) (\d{2})\.(\d{2})\.(\d{2})$')


class EdfHeader(object):
	def __init__(self):
		""" Class attributes are defined in constructor to ensure instance-specificity. """

		self.version 					= '0'
		self.local_patient_id 			= ''
		self.local_recording_id 		= ''
		self.start_date 				= ''
		self.start_time 				= ''
		self.num_of_bytes_in_header 	= HEADER_SIZE
		self.reserved 					= ''
		self.num_of_records 			= 0
		self.record_duration 			= 0.0
		self.num_of_signals 			= 0

		self.labels 					= []
		self.transducer_types 			= []
		self.physical_dimension 		= []
		self.physical_min 				= []
		self.physical_max 				= []
		self.digital_min 				= []
		self.digital_max 				= []
		self.prefiltering 				= []
		self.num_of_samples_per_record 	= []
		self.signals_reserved 			= []


	def calcNumOfBytesInHeader(self):
		return HEADER_SIZE + SIGNAL_HEADER_SIZE * self.num_of_signals


	def signalMetadata(self, idx):
		""" Scalar metadata of one signal as a {column name: value} dict. """
		if not 0 <= idx < self.num_of_signals:
			raise IndexError("Signal index {} out of range! [num_of_signals = {}]".format(idx, self.num_of_signals))

		return dict((f.name, getattr(self, f.name)[idx]) for f in SIGNAL_FIELDS)


	def setSignalColumns(self, signals):
		""" Rebuild the per-signal columns from a list of EdfSignal objects. """
		self.num_of_signals = len(signals)
		for f in SIGNAL_FIELDS:
			setattr(self, f.name, [s.getColumnValue(f.name) for s in signals])


	def startDateTime(self):
		""" The recording start as a datetime.

			The date is always day-before-month ('dd.mm.yy'), the two digit
			year is clipped like the EDF specification does: 85-99 is the
			20th century, 00-84 the 21st.
		"""
		raw = "{} {}".format(self.start_date, self.start_time)
		m = _START_RE.match(raw)
		if m is None:
			raise EdfFormatError("Invalid recording start '{}', expected 'dd.mm.yy hh.mm.ss'!".format(raw), 'start_date', raw)

		day, month, year, hour, minute, second = (int(g) for g in m.groups())

		try:
			return datetime.datetime(
				(2000+year if year<=84 else 1900+year),
				month,
				day,
				hour,
				minute,
				second
			)
		except ValueError as err:
			raise EdfFormatError("Invalid recording start '{}': {}".format(raw, err), 'start_date', raw)


	def setStartDateTime(self, dt):
		self.start_date = dt.strftime('%d.%m.%y')
		self.start_time = dt.strftime('%H.%M.%S')


	def recordStartTime(self, k):
		return self.startDateTime() + datetime.timedelta(seconds = k * self.record_duration)


	def sampleTime(self, signal_idx, s):
		""" Time of the s-th sample of a signal, with millisecond precision.

			param signal_idx: int, index of the signal in this header
			param s: int, index of the sample in the whole signal
			returns datetime
		"""
		spr = self.num_of_samples_per_record[signal_idx]
		rec_idx = s // spr
		offset = s % spr

		seconds = rec_idx * self.record_duration + offset * (self.record_duration / spr)

		return self.startDateTime() + datetime.timedelta(milliseconds = round(seconds * 1000))


	def sampleFrequency(self, signal_idx):
		""" Sampling frequency of a signal in Hertz. """
		return self.num_of_samples_per_record[signal_idx] / self.record_duration


	def duration(self):
		""" Length of the recording in seconds. """
		return self.num_of_records * self.record_duration


	def __str__(self):
		lines = [
			"---------- EDF File Header ---------",
			"8b\tVersion [{}]".format(self.version),
			"80b\tPatient ID [{}]".format(self.local_patient_id),
			"80b\tRecording ID [{}]".format(self.local_recording_id),
			"8b\tStart Date [{}]".format(self.start_date),
			"8b\tStart Time [{}]".format(self.start_time),
			"8b\tNumber of bytes in header [{}]".format(self.num_of_bytes_in_header),
			"44b\tReserved [{}]".format(self.reserved),
			"8b\tNumber of data records [{}]".format(self.num_of_records),
			"8b\tDuration of data record [{}]".format(self.record_duration),
			"4b\tNumber of signals [{}]".format(self.num_of_signals),
		]

		# columns may still be empty on a header built by hand
		columns = [getattr(self, f.name) for f in SIGNAL_FIELDS]
		for lbl, tt, pd, pmin, pmax, dmin, dmax, pf, spr, res in zip(*columns):
			lines.extend([
				"---------Signal Header---------",
				"\tLabel [{}]".format(lbl),
				"\tTransducer type [{}]".format(tt),
				"\tPhysical dimension [{}]".format(pd),
				"\tPhysical minimum [{}]".format(pmin),
				"\tPhysical maximum [{}]".format(pmax),
				"\tDigital minimum [{}]".format(dmin),
				"\tDigital maximum [{}]".format(dmax),
				"\tPrefiltering [{}]".format(pf),
				"\tNumber of samples in data record [{}]".format(spr),
				"\tSignals reserved [{}]".format(res),
			])

		lines.append("-----------------------------------")

		return "\n".join(lines)
