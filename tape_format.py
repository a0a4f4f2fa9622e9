"""
Recognise known tape image layouts and split an image into tape blocks.

A BASIC program saved by the PC-6001 starts with a 16-byte header: ten 0xD3
sync bytes followed by a 6-byte program name. On tape the header is its own
block behind a long carrier, and the program body follows behind a short one.
Anything else is written as a single long-carrier block.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple, Union


BASIC_HEADER_SIZE = 16
BASIC_SYNC_BYTE = 0xD3
BASIC_SYNC_LEN = 10
BASIC_NAME_LEN = BASIC_HEADER_SIZE - BASIC_SYNC_LEN


@dataclass(frozen=True)
class Opaque:
	"""Binary data with no recognised header."""


@dataclass(frozen=True)
class Structured:
	name: bytes
	header_len: int = BASIC_HEADER_SIZE
	body_offset: int = BASIC_HEADER_SIZE

	@property
	def display_name(self) -> str:
		# Shown the way a NUL-terminated string would print; never validated.
		return self.name.split(b"\x00", 1)[0].decode("latin-1")


TapeKind = Union[Structured, Opaque]


@dataclass(frozen=True)
class Block:
	payload: bytes
	use_short_header: bool = False


def sniff_basic(buffer: bytes) -> Optional[Structured]:
	if len(buffer) < BASIC_HEADER_SIZE:
		return None
	if any(b != BASIC_SYNC_BYTE for b in buffer[:BASIC_SYNC_LEN]):
		return None
	return Structured(name=bytes(buffer[BASIC_SYNC_LEN:BASIC_HEADER_SIZE]))


# Tried in order; the first classifier returning a result wins.
CLASSIFIERS: Tuple[Callable[[bytes], Optional[Structured]], ...] = (sniff_basic,)


def classify(buffer: bytes) -> TapeKind:
	for classifier in CLASSIFIERS:
		kind = classifier(buffer)
		if kind is not None:
			return kind
	return Opaque()


def plan_blocks(buffer: bytes, kind: Optional[TapeKind] = None) -> List[Block]:
	"""Partition `buffer` into the blocks written to tape, in order.

	The payloads of the returned blocks concatenate back to `buffer` exactly.
	A structured image exactly `header_len` bytes long yields only the header
	block; no empty body block is emitted.
	"""
	buffer = bytes(buffer)
	if kind is None:
		kind = classify(buffer)

	if isinstance(kind, Structured):
		blocks = [Block(buffer[:kind.header_len], use_short_header=False)]
		if len(buffer) > kind.body_offset:
			blocks.append(Block(buffer[kind.body_offset:], use_short_header=True))
		return blocks

	return [Block(buffer, use_short_header=False)]


def describe(kind: TapeKind) -> str:
	if isinstance(kind, Structured):
		return f'BASIC file "{kind.display_name}"'
	return "binary data"
