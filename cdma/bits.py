import numpy as np

BITS_PER_CHAR = 8


def text_to_bits(text: str) -> np.ndarray:
    """Текст -> биты ASCII (8 бит на символ, старший бит первым)"""
    try:
        raw = text.encode("latin-1")
    except UnicodeEncodeError as e:
        raise ValueError(
            f"Символ {text[e.start]!r} не помещается в {BITS_PER_CHAR} бит"
        ) from e
    return np.unpackbits(np.frombuffer(raw, dtype=np.uint8))


def bits_to_text(bits) -> str:
    """Биты -> текст; неполный последний байт отбрасывается"""
    bits = np.asarray(bits, dtype=np.uint8).ravel()
    usable = len(bits) - len(bits) % BITS_PER_CHAR
    return np.packbits(bits[:usable]).tobytes().decode("latin-1")
