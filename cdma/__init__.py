__version__ = "0.1.0"

from cdma.bits import BITS_PER_CHAR, bits_to_text, text_to_bits
from cdma.channel import Channel
from cdma.codes import CodeSet, generate_walsh_codes, is_orthogonal
from cdma.config import LogConfig, SimulationConfig
from cdma.decoder import ZERO_CORRELATION_BIT, correlate, decode
from cdma.errors import CDMAError, InvalidSizeError, LengthMismatchError
from cdma.simulation import CDMASimulation, DecodeResult, DecodeStatus, Receiver, Transmitter
from cdma.spreader import spread_bit, spread_bits
from cdma.station import Station

