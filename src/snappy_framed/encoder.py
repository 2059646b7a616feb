"""
Streaming encoder for framed Snappy data.

`FramedEncoder` is a writable raw stream. The stream identifier goes out as
soon as the encoder is constructed; after that, every `write` call is
turned into chunks immediately::

    caller bytes -> <= 64 KiB blocks -> compress -> masked CRC of the
                 -> [header][crc][payload] -> sink
                    uncompressed block

Nothing is buffered across calls, so many tiny writes produce many tiny
chunks and compress poorly. Wrap the encoder in `io.BufferedWriter` when
callers write in small pieces.
"""

from __future__ import annotations

import io

from .chunks import ChunkType
from .codec import SnappyBlockCodec
from .config import DEFAULT_CONFIG, FramingConfig
from .constants import CRC_SIZE, MAX_UNCOMPRESSED_CHUNK_SIZE, STREAM_IDENTIFIER
from .masked_crc import masked_crc
from .protocols import BlockCodec, ByteSink


class FramedEncoder(io.RawIOBase):
    """Encode a stream into Snappy-compressed frames."""

    def __init__(
        self,
        sink: ByteSink,
        *,
        config: FramingConfig | None = None,
        codec: BlockCodec | None = None,
    ) -> None:
        """
        Write the stream identifier to `sink` and prepare to encode.

        Args:
            sink: Destination for framed bytes. Not closed by the encoder.
            config: Checksum byte order and chunk type options.
            codec: Block compressor. Defaults to raw Snappy.

        Raises:
            OSError: If writing the stream identifier fails.
        """
        super().__init__()
        self._sink = sink
        self._config = config if config is not None else DEFAULT_CONFIG
        self._codec = codec if codec is not None else SnappyBlockCodec()
        self._write_all(STREAM_IDENTIFIER)

    def writable(self) -> bool:
        return True

    def write(self, data: bytes | bytearray | memoryview) -> int:  # type: ignore[override]
        """
        Encode `data` as one or more chunks and write them to the sink.

        Returns:
            len(data); the input is always consumed in full.
        """
        if self.closed:
            raise ValueError("I/O operation on closed encoder")

        with memoryview(data) as view, view.cast("B") as source:
            for start in range(0, len(source), MAX_UNCOMPRESSED_CHUNK_SIZE):
                block = bytes(source[start : start + MAX_UNCOMPRESSED_CHUNK_SIZE])
                self._write_chunk(block)
            return len(source)

    def flush(self) -> None:
        """
        Flush the sink. No chunk is emitted; every write is already framed.

        A sink that was closed first is left alone, so closing the encoder
        afterwards (or letting it be collected) does not fail.
        """
        super().flush()
        if not getattr(self._sink, "closed", False):
            self._sink.flush()

    def _write_chunk(self, block: bytes) -> None:
        # The CRC covers the UNCOMPRESSED data, so the decoder can verify
        # it after decompression.
        crc = masked_crc(block)

        chunk_type = ChunkType.COMPRESSED
        payload = self._codec.compress(block)
        if self._config.emit_uncompressed_chunks and len(payload) >= len(block):
            chunk_type = ChunkType.UNCOMPRESSED
            payload = block

        # [type: 1][length: 3 LE][crc: 4][payload]
        #
        # The length covers the CRC and payload, not the header.
        chunk_length = CRC_SIZE + len(payload)
        header = bytearray()
        header.append(chunk_type)
        header.extend(chunk_length.to_bytes(3, "little"))
        header.extend(crc.to_bytes(CRC_SIZE, self._config.crc_byte_order))

        self._write_all(header)
        self._write_all(payload)

    def _write_all(self, data: bytes | bytearray) -> None:
        """Write every byte of `data`, retrying after short writes."""
        view = memoryview(data)
        while view:
            written = self._sink.write(view)
            # Sinks that report no count are taken to accept everything.
            if written is None:
                return
            if written == 0:
                raise OSError("Sink accepted no bytes")
            view = view[written:]
