import io

import numpy as np
import pytest

from edf_tools.edf_header import EdfHeader
from edf_tools.edf_signal import EdfSignal
from edf_tools.edf_writer import EdfWriter

ECG_SAMPLES = [100, 50, 23, 75, 12, 88, 73, 12, 34, 83]
SOUND_SAMPLES = [11, 200, 300, 123, 87, 204, 145, 234, 222, 75]


def makeHeader(num_of_records, num_of_signals, record_duration = 1.0):
	h = EdfHeader()
	h.version = '0'
	h.local_patient_id = 'TEST PATIENT ID'
	h.local_recording_id = 'TEST RECORD ID'
	h.start_date = '11.11.16'
	h.start_time = '12.12.12'
	h.reserved = 'RESERVED'
	h.num_of_records = num_of_records
	h.record_duration = record_duration
	h.num_of_signals = num_of_signals
	return h


def makeSignals(num_of_records, sprs, seed = 0):
	rng = np.random.default_rng(seed)
	signals = []
	for i, spr in enumerate(sprs):
		signals.append(EdfSignal(
			label = 'SIG{}'.format(i),
			transducer_type = 'AgAgCl electrode',
			physical_dimension = 'uV',
			physical_min = -500.5,
			physical_max = 500.5,
			digital_min = -32768,
			digital_max = 32767,
			prefiltering = 'HP:0.1Hz LP:75Hz',
			num_of_samples_per_record = spr,
			reserved = '',
			samples = rng.integers(-32768, 32768, size=num_of_records * spr)
		))
	return signals


def encode(header, signals):
	buff = io.BytesIO()
	EdfWriter(buff).encode(header, signals)
	return buff.getvalue()


@pytest.fixture
def ecg_sound():
	""" The two-signal, one-record recording with ECG and SOUND channels. """
	ecg = EdfSignal(
		label = 'ECG',
		transducer_type = 'UNKNOWN',
		physical_dimension = 'mV',
		physical_min = -10.2325,
		physical_max = 10.2325,
		digital_min = -2048,
		digital_max = 2047,
		prefiltering = 'UNKNOWN',
		num_of_samples_per_record = 10,
		reserved = 'RESERVED',
		samples = ECG_SAMPLES
	)
	sound = EdfSignal(
		label = 'SOUND',
		transducer_type = 'UNKNOWN',
		physical_dimension = 'mV',
		physical_min = -44,
		physical_max = 44.0,
		digital_min = -2048,
		digital_max = 2047,
		prefiltering = 'UNKNOWN',
		num_of_samples_per_record = 10,
		reserved = 'RESERVED',
		samples = SOUND_SAMPLES
	)
	return makeHeader(1, 2), [ecg, sound]


@pytest.fixture
def multi_record():
	""" Three signals with different widths over five records. """
	h = makeHeader(5, 3, record_duration = 2.0)
	signals = makeSignals(5, [4, 7, 2], seed = 42)
	return h, signals, encode(h, signals)
