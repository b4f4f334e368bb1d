""" A structured data container for an EDF file: its header and its signals.

	An EdfContainer represents a single EDF file. It reads a file path, a
	binary stream, raw bytes or base64 text in one of two modes:

	- eager (default): the header and every signal are decoded and the
	  source is released right away,
	- lazy: only the header is decoded, the signals are allocated empty and
	  the source stays open until close(), readSignal() fills one signal at a
	  time.

	>>> with EdfContainer('night.edf', lazy=True) as e:
	...     ecg = e.readSignal('ECG')

	One container owns one source, reads move the shared stream position so
	a container must not be used from several threads at once.

	For the EDF specification see:
	http://www.edfplus.info/specs/index.html
"""

import base64
import io
import os

from .edf_reader import EdfReader
from .edf_writer import EdfWriter
from .exceptions import EdfError, EdfFormatError
from .logger import logger


class EdfContainer(object):
	def __init__(self, source = None, lazy = False):
		""" param source: optional path, bytes or binary stream to open right away """

		self.file_path 			= None
		self.file_basename 		= None
		self.file_obj 			= None
		self.header 			= None
		self.signals 			= []
		self.lazy 				= False

		self._owns_file_obj 	= False
		self._reader 			= None

		if source is None:
			return

		if isinstance(source, (str, os.PathLike)):
			self.openPath(source, lazy)
		elif isinstance(source, (bytes, bytearray, memoryview)):
			self.openBytes(source, lazy)
		else:
			self.openStream(source, lazy)


	def openPath(self, file_path, lazy = False):
		if not os.path.isfile(file_path):
			raise FileNotFoundError("File '{}' not found!".format(file_path))

		self.close()

		self.file_path = os.fspath(file_path)
		self.file_basename = os.path.splitext(os.path.basename(self.file_path))[0]

		self._load(open(self.file_path, 'rb'), True, lazy)

		return self


	def openStream(self, stream, lazy = False):
		""" Read from a seekable binary stream, the stream is never closed by the container. """
		self.close()
		self._load(stream, False, lazy)

		return self


	def openBytes(self, data, lazy = False):
		self.close()
		self._load(io.BytesIO(bytes(data)), True, lazy)

		return self


	def openBase64(self, text, lazy = False):
		""" Read base64 text (str or bytes), line breaks and other whitespace are ignored. """
		compact = text[:0].join(text.split())

		try:
			data = base64.b64decode(compact, validate=True)
		except ValueError as err:
			raise EdfFormatError("Invalid base64 EDF data! [{}]".format(err))

		return self.openBytes(data, lazy)


	def _load(self, file_obj, owned, lazy):
		self.header = None
		self.signals = []
		self.lazy = lazy

		reader = EdfReader(file_obj)
		keep_open = False

		try:
			header = reader.decodeHeader()
			signals = reader.allocateSignals(header) if lazy else reader.decodeAllSignals(header)

			self.header = header
			self.signals = signals

			if lazy:
				self.file_obj = file_obj
				self._owns_file_obj = owned
				self._reader = reader
				keep_open = True
		finally:
			if owned and not keep_open:
				file_obj.close()


	def getSignal(self, key):
		""" Look up a signal by index or by label (first match), None if not found. """
		if isinstance(key, str):
			for s in self.signals:
				if s.label == key:
					return s
			return None

		if 0 <= key < len(self.signals):
			return self.signals[key]

		return None


	def readSignal(self, key):
		""" Decode the samples of one signal from the open source.

			param key: int signal index or str label
			returns the filled EdfSignal, None if no signal matches
		"""
		signal = self.getSignal(key)
		if signal is None:
			logger.warning("Signal '%s' not found.", key)
			return None

		if not self.lazy:
			# every signal was decoded on open
			return signal

		if self._reader is None:
			raise EdfError("No open EDF source, open the container with lazy=True to read single signals.")

		return self._reader.readSignal(self.header, signal)


	def readRecord(self, rec_idx):
		if self._reader is None:
			raise EdfError("No open EDF source, open the container with lazy=True to read single records.")

		return self._reader.readRecord(self.header, rec_idx)


	def save(self, file_path):
		""" Write the header and signals to a file, does nothing without a header.

			The file is encoded in memory first, the target is only opened
			(and truncated) once encoding succeeded. A lazily opened container
			reads its remaining signals before encoding, so it can be saved
			over its own source.
		"""
		if self.header is None:
			logger.warning("No EDF header to save, '%s' was not written.", file_path)
			return

		buff = io.BytesIO()
		self.saveStream(buff)

		with open(file_path, 'wb') as f:
			f.write(buff.getvalue())


	def saveStream(self, stream):
		if self.header is None:
			logger.warning("No EDF header to save, nothing was written.")
			return

		self._readPendingSignals()

		EdfWriter(stream).encode(self.header, self.signals)


	def _readPendingSignals(self):
		if not self.lazy or self._reader is None:
			return

		for s in self.signals:
			if len(s) < self.header.num_of_records * s.num_of_samples_per_record:
				self._reader.readSignal(self.header, s)


	def close(self):
		if self.file_obj is not None and self._owns_file_obj:
			self.file_obj.close()

		self.file_obj = None
		self._owns_file_obj = False
		self._reader = None


	def __enter__(self):
		return self


	def __exit__(self, exc_type, exc_value, traceback):
		self.close()
		return False


	def __str__(self):
		if self.header is None:
			return "<empty EdfContainer>"

		return "\n".join([str(self.header)] + [str(s) for s in self.signals])
