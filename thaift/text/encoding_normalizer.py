"""
Encoding Normalizer Module
Re-encodes a chunk into the encoding the boundary segmenter works on.

Besides the converted bytes, the normalizer records how many bytes every
character occupies in the source and in the normalized encoding, so cut
points found on the normalized text can be mapped back onto the original
input. Malformed input never aborts the conversion: offending bytes are
flagged, replaced and reported as defects.
"""

import codecs
import logging
from typing import List

from thaift.conf import default_normalized_encoding
from thaift.core.exceptions import AllocationFailure, EncodingConversionDefect
from thaift.text.models import (
    CharWidthTable,
    Chunk,
    InputSpan,
    NormalizedBuffer,
    canonical_encoding,
)

logger = logging.getLogger(__name__)

REPLACEMENT_CHARACTER = '\ufffd'

# Worst-case bytes per character, keyed by canonical codec name
_MAX_BYTES_PER_CHAR = {
    'tis-620': 1,
    'cp874': 1,
    'iso8859-11': 1,
    'ascii': 1,
    'iso8859-1': 1,
    'cp1252': 1,
    'utf-8': 4,
    'utf-16': 6,
    'utf-16-le': 4,
    'utf-16-be': 4,
    'utf-32': 8,
    'utf-32-le': 4,
    'utf-32-be': 4,
    'euc_jp': 3,
    'shift_jis': 2,
    'gb2312': 2,
    'gbk': 2,
    'gb18030': 4,
    'big5': 2,
    'euc_kr': 2,
}

# Used for codecs missing from the table above
_FALLBACK_MAX_BYTES = 8


def max_bytes_per_char(encoding: str) -> int:
    """
    Return the largest number of bytes one character can take in an encoding.

    Args:
        encoding: Codec name or alias

    Returns:
        int: Worst-case width used to size destination buffers
    """
    return _MAX_BYTES_PER_CHAR.get(canonical_encoding(encoding), _FALLBACK_MAX_BYTES)


def _split_valid(raw: bytes, encoding: str, chars: List[str], widths: List[int]) -> None:
    """
    Decode bytes known to be valid, recording the width of each character.

    Bytes are fed to an incremental decoder one at a time; the bytes consumed
    until a character comes out belong to that character. When one sequence
    yields several characters, the first one carries the width and the
    others get 0.
    """
    decoder = codecs.getincrementaldecoder(encoding)()
    pending = 0
    for i in range(len(raw)):
        pending += 1
        out = decoder.decode(raw[i:i + 1])
        if out:
            chars.extend(out)
            widths.append(pending)
            widths.extend([0] * (len(out) - 1))
            pending = 0
    out = decoder.decode(b'', final=True)
    if out:
        chars.extend(out)
        widths.append(pending)
        widths.extend([0] * (len(out) - 1))
    elif pending and widths:
        widths[-1] += pending


def _record_defect(raw_start: int, raw_end: int, reason: str, chars: List[str], widths: List[int],
                   error_markers: List[bool], defects: List[EncodingConversionDefect]) -> None:
    """Substitute one undecodable byte range, merging it into an adjacent defect."""
    chars.append(REPLACEMENT_CHARACTER)
    widths.append(raw_end - raw_start)
    for i in range(raw_start, raw_end):
        error_markers[i] = True
    if defects and defects[-1].stage == 'decode' and defects[-1].end == raw_start:
        defects[-1] = EncodingConversionDefect('decode', defects[-1].start, raw_end, defects[-1].reason)
    else:
        defects.append(EncodingConversionDefect('decode', raw_start, raw_end, reason))


def decode_with_widths(raw: bytes, encoding: str, error_markers: List[bool],
                       defects: List[EncodingConversionDefect]):
    """
    Decode source bytes into characters and their source byte widths.

    Runs a single incremental decoder over the bytes, one at a time. Each
    undecodable byte range becomes a single U+FFFD whose width is the length
    of the range; the range is flagged in error_markers and adjacent ranges
    share one defect record. After an error only the few bytes the decoder
    had buffered past the bad range are fed again, so the cost stays linear
    in the chunk length.

    Args:
        raw: Chunk bytes
        encoding: Source codec name
        error_markers: Per-byte flags, updated in place
        defects: Defect records, appended to

    Returns:
        tuple: (list of characters, list of source widths)
    """
    chars: List[str] = []
    widths: List[int] = []
    decoder = codecs.getincrementaldecoder(encoding)()
    start = 0  # first byte not yet attributed to a character
    i = 0
    while True:
        final = i >= len(raw)
        try:
            out = decoder.decode(raw[i:i + 1], final=final)
        except UnicodeDecodeError as e:
            bad_start = start + e.start
            bad_end = min(len(raw), start + max(e.end, e.start + 1))
            if bad_start > start:
                _split_valid(raw[start:bad_start], encoding, chars, widths)
            _record_defect(bad_start, bad_end, e.reason, chars, widths, error_markers, defects)
            decoder.reset()
            start = i = bad_end
            continue
        if not final:
            i += 1
        if out:
            chars.extend(out)
            widths.append(i - start)
            widths.extend([0] * (len(out) - 1))
            start = i
        if final:
            break
    if start < len(raw) and widths:
        widths[-1] += len(raw) - start
    return chars, widths


def normalize(span: InputSpan, chunk: Chunk, target_encoding: str = default_normalized_encoding,
              strict: bool = False) -> NormalizedBuffer:
    """
    Convert a chunk of the input into the normalized encoding.

    The destination buffer is allocated up front at chunk length times the
    worst-case character width of the target encoding, so conversion can
    never overflow it whatever the actual ratio turns out to be.

    Args:
        span: Whole input the chunk belongs to
        chunk: Byte range to convert
        target_encoding: Encoding the segmenter expects
        strict: Raise the first conversion defect instead of substituting

    Returns:
        NormalizedBuffer: Converted bytes, text and width table

    Raises:
        AllocationFailure: If the destination buffer cannot be allocated
        EncodingConversionDefect: Only when strict is True
    """
    target = canonical_encoding(target_encoding)
    raw = chunk.slice(span)
    capacity = chunk.length * max_bytes_per_char(target)
    try:
        destination = bytearray(capacity)
        error_markers = [False] * chunk.length
    except MemoryError:
        raise AllocationFailure(f'Cannot allocate {capacity} bytes for chunk at offset {chunk.start}')

    defects: List[EncodingConversionDefect] = []
    chars, source_widths = decode_with_widths(raw, span.encoding, error_markers, defects)

    encoder = codecs.getincrementalencoder(target)()
    normalized_chars: List[str] = []
    normalized_widths: List[int] = []
    used = 0
    source_offset = 0
    for index, ch in enumerate(chars):
        try:
            encoded = encoder.encode(ch)
            normalized_chars.append(ch)
        except UnicodeEncodeError as e:
            encoded = ch.encode(target, errors='replace')
            substitute = encoded.decode(target, errors='replace')
            normalized_chars.append(substitute if len(substitute) == 1 else '?')
            # bytes already reported by the decoder are not reported again
            if not (source_widths[index] and error_markers[source_offset]):
                defects.append(EncodingConversionDefect('encode', index, index + 1, e.reason))
        source_offset += source_widths[index]
        if used + len(encoded) > capacity:
            raise AllocationFailure(f'Normalized buffer overflow in chunk at offset {chunk.start}')
        destination[used:used + len(encoded)] = encoded
        normalized_widths.append(len(encoded))
        used += len(encoded)

    if defects:
        logger.warning(
            f'{len(defects)} conversion defect(s) in chunk ({chunk.start}, {chunk.length}) '
            f'{span.encoding} -> {target}'
        )
        if strict:
            raise defects[0]

    return NormalizedBuffer(
        data=bytes(destination[:used]),
        encoding=target,
        text=''.join(normalized_chars),
        widths=CharWidthTable(tuple(source_widths), tuple(normalized_widths)),
        error_markers=error_markers,
        defects=defects,
    )
