""" EDF Tools

	Entry point for reading, summarizing and exporting EDF recordings. File
	names are resolved against an optional data directory, the decoding
	itself is done by EdfContainer.

	The EDF IO was inspired by Boris Reuderink's EEGTools:
	https://github.com/breuderink/eegtools/tree/master/eegtools
"""

import csv
import os

from .edf_container import EdfContainer
from .logger import logger, set_log_level


class EdfTools(object):


	def __init__(self, data_dir = None, csv_delimiter = ';', log_level = None):
		""" param data_dir: directory the file names are relative to, None for the working directory
			param csv_delimiter: single character separating the exported CSV columns
			param log_level: optional level for the 'edf_tools' logger
		"""

		if log_level is not None:
			set_log_level(log_level)

		self.data_dir 		= self.filterDataDir(data_dir)
		self.csv_delimiter 	= self.filterCsvDelimiter(csv_delimiter)


	def filterDataDir(self, d):
		if d is None:
			return None

		d = os.path.abspath(d)
		if not os.path.isdir(d):
			raise ValueError("Data directory '{}' does not exist! [filterDataDir()]".format(d))

		return d


	def filterCsvDelimiter(self, delimiter):
		if not isinstance(delimiter, str) or len(delimiter) != 1:
			raise ValueError("CSV delimiter must be a single character! [filterCsvDelimiter({!r})]".format(delimiter))

		return delimiter


	def resolvePath(self, file_name):
		if self.data_dir is None:
			return os.path.abspath(file_name)

		return os.path.abspath(os.path.join(self.data_dir, file_name))


	def createEdfContainer(self, file_name, lazy = False):
		""" Open an EDF file and return the container.

			With lazy=True only the headers are loaded and the file stays
			open, see EdfContainer.readSignal().
		"""
		abs_path = self.resolvePath(file_name)

		if not os.path.isfile(abs_path):
			raise FileNotFoundError("File '{}' not found!".format(abs_path))

		logger.info("Loading EDF file '%s'...", abs_path)
		e = EdfContainer(abs_path, lazy)
		logger.info("Loading EDF file '%s'... OK", abs_path)

		return e


	def loadEdf(self, file_name):
		return self.createEdfContainer(file_name)


	def loadEdfSignals(self, file_name, keys):
		""" Read only the requested signals of an EDF file.

			param file_name: str, resolved against data_dir
			param keys: iterable of signal indices and/or labels
			returns EdfContainer, closed, with only the found signals filled
		"""
		with self.createEdfContainer(file_name, lazy=True) as e:
			for key in keys:
				logger.info("Reading signal '%s'...", key)
				e.readSignal(key)

		return e


	def loadEdfBase64(self, text):
		""" Decode a base64 encoded EDF file held in memory. """
		return EdfContainer().openBase64(text)


	def summarize(self, e):
		""" Text dump of the header and the first samples of each signal. """
		return str(e)


	def exportSignal(self, e, key, file_path):
		""" Export one signal to a CSV file.

			The columns are the time in seconds from the recording start,
			the digital value and the value multiplied by the signal's
			scale factor.

			param e: EdfContainer with the signal already read
			param key: signal index or label
			param file_path: output file
		"""
		s = e.getSignal(key)
		if s is None:
			raise KeyError("Signal '{}' not found!".format(key))

		h = e.header
		spr = s.num_of_samples_per_record
		sample_period = h.record_duration / spr
		scaled = s.scaledSamples()

		logger.info("Exporting signal '%s' to '%s'...", s.label, file_path)

		with open(file_path, 'w', newline='') as fp:
			csvw = csv.writer(fp, dialect='excel', delimiter=self.csv_delimiter)

			csvw.writerow(['Time (sec)', 'Digital Value', 'Scaled Value'])
			for s_idx, (dv, sv) in enumerate(zip(s.samples, scaled)):
				rec_idx, offset = divmod(s_idx, spr)
				csvw.writerow([
					round(rec_idx * h.record_duration + offset * sample_period, 3),
					int(dv),
					float(sv)
				])

		logger.info("Exporting signal '%s'... OK", s.label)
