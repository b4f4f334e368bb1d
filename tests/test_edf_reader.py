import io

import numpy as np
import pytest

from edf_tools.edf_reader import EdfReader
from edf_tools.exceptions import EdfFormatError
from edf_tools.fields import HEADER_FIELDS, SIGNAL_FIELDS

from conftest import encode, makeHeader, makeSignals


def decode(data):
	reader = EdfReader(io.BytesIO(data))
	h = reader.decodeHeader()
	return h, reader.decodeAllSignals(h)


def assertSameHeader(h1, h2):
	for f in HEADER_FIELDS + SIGNAL_FIELDS:
		assert getattr(h1, f.name) == getattr(h2, f.name), f.name


@pytest.mark.parametrize('num_of_records', [1, 5])
def test_round_trip(num_of_records):
	h = makeHeader(num_of_records, 3, record_duration = 0.5)
	signals = makeSignals(num_of_records, [8, 3, 5], seed = num_of_records)

	h2, signals2 = decode(encode(h, signals))

	assertSameHeader(h, h2)
	assert len(signals2) == 3
	for s, s2 in zip(signals, signals2):
		assert s2.label == s.label
		assert s2.physical_min == s.physical_min
		assert s2.digital_max == s.digital_max
		assert s2.num_of_samples_per_record == s.num_of_samples_per_record
		np.testing.assert_array_equal(s2.samples, s.samples)


def test_selective_read_matches_full_read(multi_record):
	_, _, data = multi_record
	reader = EdfReader(io.BytesIO(data))
	h = reader.decodeHeader()
	everything = reader.decodeAllSignals(h)

	for idx, signal in enumerate(reader.allocateSignals(h)):
		reader.readSignal(h, signal)
		np.testing.assert_array_equal(signal.samples, everything[idx].samples)
		assert signal.capacity == h.num_of_records * h.num_of_samples_per_record[idx]


def test_other_signal_widths_do_not_change_target():
	target = makeSignals(4, [6], seed = 7)[0]
	results = []

	for other_spr in (1, 9, 30):
		others = makeSignals(4, [other_spr, other_spr + 2], seed = other_spr)
		h = makeHeader(4, 3)
		data = encode(h, [others[0], target, others[1]])

		reader = EdfReader(io.BytesIO(data))
		h2 = reader.decodeHeader()
		signal = reader.allocateSignals(h2)[1]
		results.append(reader.readSignal(h2, signal).samples.copy())

	for samples in results:
		np.testing.assert_array_equal(samples, target.samples)


def test_allocate_signals_have_empty_buffers(multi_record):
	h, _, data = multi_record
	reader = EdfReader(io.BytesIO(data))
	signals = reader.allocateSignals(reader.decodeHeader())

	assert [s.index for s in signals] == [0, 1, 2]
	assert [s.label for s in signals] == ['SIG0', 'SIG1', 'SIG2']
	assert all(len(s) == 0 for s in signals)


def test_read_record(multi_record):
	h, signals, data = multi_record
	reader = EdfReader(io.BytesIO(data))
	h2 = reader.decodeHeader()

	record = reader.readRecord(h2, 3)

	assert len(record) == 3
	for s, block in zip(signals, record):
		n = s.num_of_samples_per_record
		np.testing.assert_array_equal(block, s.samples[3*n:4*n])

	with pytest.raises(IndexError):
		reader.readRecord(h2, 5)


def test_values_are_stripped(ecg_sound):
	h, signals = ecg_sound
	h2, signals2 = decode(encode(h, signals))

	assert h2.local_patient_id == 'TEST PATIENT ID'
	assert h2.labels == ['ECG', 'SOUND']
	assert signals2[1].physical_min == -44.0
	assert h2.record_duration == 1.0


def test_truncated_header():
	with pytest.raises(EdfFormatError) as exc:
		EdfReader(io.BytesIO(b'0       PATIENT')).decodeHeader()
	assert exc.value.field == 'local_patient_id'


def test_truncated_signal_header(ecg_sound):
	h, signals = ecg_sound
	data = encode(h, signals)

	with pytest.raises(EdfFormatError) as exc:
		EdfReader(io.BytesIO(data[:300])).decodeHeader()
	assert exc.value.field == 'transducer_types'


def patch(data, start, text):
	return data[:start] + text + data[start + len(text):]


@pytest.mark.parametrize('start, text, field', [
	(236, b'1,5     ', 'num_of_records'),
	(244, b'1,5     ', 'record_duration'),
	(244, b'nan     ', 'record_duration'),
	(252, b'two ', 'num_of_signals'),
	(184, b'        ', 'num_of_bytes_in_header'),
	(464, b'-10,2325', 'physical_min'),
	(496, b'-2048.0 ', 'digital_min'),
	(688, b'1_0     ', 'num_of_samples_per_record'),
])
def test_unparsable_number(ecg_sound, start, text, field):
	h, signals = ecg_sound
	data = patch(encode(h, signals), start, text)

	with pytest.raises(EdfFormatError) as exc:
		EdfReader(io.BytesIO(data)).decodeHeader()

	assert exc.value.field == field
	assert exc.value.raw == text.decode('ascii').strip()


def test_float_with_exponent_is_accepted(ecg_sound):
	h, signals = ecg_sound
	data = patch(encode(h, signals), 244, b'1e0     ')
	assert EdfReader(io.BytesIO(data)).decodeHeader().record_duration == 1.0


def test_negative_record_count(ecg_sound):
	h, signals = ecg_sound
	data = patch(encode(h, signals), 236, b'-1      ')

	with pytest.raises(EdfFormatError):
		EdfReader(io.BytesIO(data)).decodeHeader()


@pytest.mark.parametrize('count', [b'0   ', b'-1  '])
def test_no_signals(count):
	h = makeHeader(3, 0)
	data = patch(encode(h, []), 252, count)

	h2, signals = decode(data)

	assert h2.num_of_signals == 0
	assert h2.labels == []
	assert signals == []


def test_truncated_body(multi_record):
	_, _, data = multi_record

	with pytest.raises(EdfFormatError):
		decode(data[:-1])


def test_truncated_body_single_signal(multi_record):
	_, _, data = multi_record
	reader = EdfReader(io.BytesIO(data[:-10]))
	h = reader.decodeHeader()
	first, second, third = reader.allocateSignals(h)

	reader.readSignal(h, first)
	with pytest.raises(EdfFormatError):
		reader.readSignal(h, third)

	# signals read before the failure are untouched
	assert len(first) == h.num_of_records * first.num_of_samples_per_record
