""" A single EDF channel: its metadata and its digital samples.

	An EdfSignal is a copy of one index of the EdfHeader per-signal columns
	plus its own sample buffer. It does not keep a reference to the header,
	changing a signal does not change the header it was created from.
"""

import numpy as np

# header column name -> EdfSignal attribute
COLUMN_ATTRS = {
	'labels': 'label',
	'transducer_types': 'transducer_type',
	'physical_dimension': 'physical_dimension',
	'physical_min': 'physical_min',
	'physical_max': 'physical_max',
	'digital_min': 'digital_min',
	'digital_max': 'digital_max',
	'prefiltering': 'prefiltering',
	'num_of_samples_per_record': 'num_of_samples_per_record',
	'signals_reserved': 'reserved',
}

SAMPLE_DTYPE = np.dtype('<i2')

_INT16_MIN = np.iinfo(np.int16).min
_INT16_MAX = np.iinfo(np.int16).max


class EdfSignal(object):

	def __init__(self, index = None, label = '', transducer_type = '', physical_dimension = '',
			physical_min = 0.0, physical_max = 0.0, digital_min = 0, digital_max = 0,
			prefiltering = '', num_of_samples_per_record = 0, reserved = '', samples = None):

		self.index 						= index
		self.label 						= label
		self.transducer_type 			= transducer_type
		self.physical_dimension 		= physical_dimension
		self.physical_min 				= physical_min
		self.physical_max 				= physical_max
		self.digital_min 				= digital_min
		self.digital_max 				= digital_max
		self.prefiltering 				= prefiltering
		self.num_of_samples_per_record 	= num_of_samples_per_record
		self.reserved 					= reserved

		self._buffer 					= np.empty(0, dtype=SAMPLE_DTYPE)
		self._count 					= 0

		if samples is not None:
			self.samples = samples


	@classmethod
	def fromHeader(cls, header, idx):
		""" Allocate the idx-th signal of a header with an empty sample buffer. """
		meta = header.signalMetadata(idx)
		kwargs = dict((COLUMN_ATTRS[name], value) for name, value in meta.items())

		return cls(index=idx, **kwargs)


	def getColumnValue(self, column):
		return getattr(self, COLUMN_ATTRS[column])


	@property
	def samples(self):
		""" The digital samples read or set so far (a view, not a copy). """
		return self._buffer[:self._count]

	@samples.setter
	def samples(self, values):
		arr = self._asSamples(values)
		self._buffer = arr.copy()
		self._count = arr.shape[0]


	@property
	def capacity(self):
		return self._buffer.shape[0]


	def reserve(self, capacity):
		""" Drop the current samples and pre-size the buffer. """
		self._buffer = np.empty(capacity, dtype=SAMPLE_DTYPE)
		self._count = 0


	def appendSamples(self, values):
		""" Append samples, the buffer only grows if its capacity is exceeded. """
		arr = self._asSamples(values)
		n = arr.shape[0]
		end = self._count + n

		if end > self.capacity:
			grown = np.empty(max(end, 2 * self.capacity), dtype=SAMPLE_DTYPE)
			grown[:self._count] = self._buffer[:self._count]
			self._buffer = grown

		self._buffer[self._count:end] = arr
		self._count = end


	def scaleFactor(self):
		""" Physical units per digital step.

			Raises ZeroDivisionError if digital_max == digital_min.
		"""
		return (self.physical_max - self.physical_min) / (self.digital_max - self.digital_min)


	def scaledSample(self, idx):
		return int(self.samples[idx]) * self.scaleFactor()


	def scaledSamples(self):
		""" All samples multiplied by scaleFactor(), without offset correction. """
		return self.samples.astype(np.float64) * self.scaleFactor()


	def physicalSamples(self):
		""" All samples calibrated so that digital_min maps to physical_min.

			This is the conversion of the EDF specification:
			(digital - digital_min) * gain + physical_min
		"""
		gain = self.scaleFactor()
		return (self.samples.astype(np.float64) - self.digital_min) * gain + self.physical_min


	@staticmethod
	def _asSamples(values):
		arr = np.asarray(values)
		if arr.ndim != 1:
			arr = arr.reshape(-1)

		if arr.size and arr.dtype != SAMPLE_DTYPE:
			if not np.issubdtype(arr.dtype, np.integer):
				raise TypeError("EDF samples must be integers, got {}!".format(arr.dtype))
			if arr.min() < _INT16_MIN or arr.max() > _INT16_MAX:
				raise ValueError("EDF samples must fit in 16 bits! [min: {}, max: {}]".format(arr.min(), arr.max()))

		return arr.astype(SAMPLE_DTYPE, copy=False)


	def __len__(self):
		return self._count


	def __str__(self):
		return "{} {}/{} [{} ...]".format(
			self.label,
			self.num_of_samples_per_record,
			self._count,
			",".join(str(v) for v in self.samples[:10])
		)
