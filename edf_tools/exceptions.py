""" Errors raised while reading or writing EDF files. """


class EdfError(Exception):
	pass


class EdfFormatError(EdfError, ValueError):
	""" Malformed or truncated header field, unparsable number, inconsistent
		signal count or missing sample data.

		The offending field name (if any) is kept in 'field', the raw text
		in 'raw'.
	"""

	def __init__(self, message, field = None, raw = None):
		super(EdfFormatError, self).__init__(message)
		self.field = field
		self.raw = raw
