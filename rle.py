"""
This module provides Run-Length Encoding (RLE) and decoding of flat sequences of arbitrary comparable values.

Two token representations are supported. The uniform scheme (`encode`) tags every run, including singletons, with an
explicit count, producing `(count, value)` tuples. The modified scheme (`mod_encode` and `encode_direct`) emits
`Single(value)` for runs of length 1 and `Run(count, value)` for longer runs, which is more compact for data with many
singleton runs. `decode` expands either representation, or a mix of both, back into a list.

`encode_array` and `decode_array` are vectorized counterparts of the uniform scheme for 1-D numpy arrays.
"""
import logging
from dataclasses import dataclass
from typing import Generic, Iterable, List, Sequence, Tuple, TypeVar, Union

import numpy as np

LOGGER = logging.getLogger('rle')

T = TypeVar('T')


@dataclass(frozen=True)
class Single(Generic[T]):
    """A run of exactly one element."""
    value: T


@dataclass(frozen=True)
class Run(Generic[T]):
    """A run of `count` consecutive copies of `value`. Encoders only produce it with count >= 2."""
    count: int
    value: T


Rle = Union[Single[T], Run[T]]


def encode(sequence: Iterable[T]) -> List[Tuple[int, T]]:
    """
    Perform uniform Run-Length Encoding on a sequence.

    Parameters
    ----------
    sequence : Iterable[T]
        The values to encode. Consecutive values are compared with `==`.

    Returns
    -------
    List[Tuple[int, T]]
        One `(count, value)` tuple per maximal run, in input order.
    """
    output = []
    count = 0
    prev_value = None
    for value in sequence:
        if count and value == prev_value:
            count += 1
        else:
            if count:
                output.append((count, prev_value))
            count = 1
            prev_value = value
    if count:
        output.append((count, prev_value))
    return output


def mod_encode(sequence: Iterable[T]) -> List[Rle[T]]:
    """
    Perform a modified Run-Length Encoding on a sequence.
    In this modified scheme, runs of length 1 are emitted as `Single(value)`, and longer runs as `Run(count, value)`.

    Parameters
    ----------
    sequence : Iterable[T]
        The values to encode.

    Returns
    -------
    List[Rle[T]]
        The run-length encoded tokens.
    """
    output = []
    for value in sequence:
        last = output[-1] if output else None
        # The token of the run in progress is rewritten in place, never followed by a second token for the same run
        if isinstance(last, Single) and last.value == value:
            output[-1] = Run(2, value)
        elif isinstance(last, Run) and last.value == value:
            output[-1] = Run(last.count + 1, last.value)
        else:
            output.append(Single(value))
    return output


def encode_direct(sequence: Sequence[T]) -> List[Rle[T]]:
    """
    Perform the modified Run-Length Encoding in a single pass, without promoting tokens after they are emitted.
    Each run is measured first, and its token is emitted once. The result is the same as `mod_encode`.

    Parameters
    ----------
    sequence : Sequence[T]
        The values to encode.

    Returns
    -------
    List[Rle[T]]
        The run-length encoded tokens.
    """
    output = []
    i = 0
    n = len(sequence)
    while i < n:
        value = sequence[i]
        j = i + 1
        while j < n and sequence[j] == value:
            j += 1
        output.append(Single(value) if j - i == 1 else Run(j - i, value))
        i = j
    return output


def retag(pairs: Iterable[Tuple[int, T]]) -> List[Rle[T]]:
    """Convert uniform `(count, value)` tokens into `Single` and `Run` tokens."""
    return [Single(value) if count == 1 else Run(count, value) for count, value in pairs]


def decode(tokens: Iterable[Union[Rle[T], Tuple[int, T]]]) -> List[T]:
    """
    Decode Run-Length Encoded tokens.
    Both representations are accepted, even mixed in the same sequence, and runs need not be maximal. A run with a
    count of 0 contributes no elements.

    Parameters
    ----------
    tokens : Iterable[Union[Rle[T], Tuple[int, T]]]
        `Single`, `Run` or `(count, value)` tokens.

    Returns
    -------
    List[T]
        The decoded values.
    """
    output = []
    for token in tokens:
        if isinstance(token, Single):
            output.append(token.value)
            continue
        if isinstance(token, Run):
            count, value = token.count, token.value
        elif isinstance(token, tuple) and len(token) == 2:
            count, value = token
        else:
            raise TypeError(f"Invalid token: {token!r}")
        if count < 0:
            raise ValueError(f"Invalid token: negative count in {token!r}")
        if count == 0:
            LOGGER.debug("Skipping zero-count token %r", token)
        output.extend([value] * count)
    return output


def encode_array(array: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """
    Perform uniform Run-Length Encoding on a 1D numpy array.

    Parameters
    ----------
    array : np.ndarray
        Array to encode. Must be 1D.

    Returns
    -------
    tuple of np.ndarray and np.ndarray
        The length of each maximal run, and the value repeated in it.
    """
    array = np.asarray(array)
    if array.ndim != 1:
        raise ValueError("array must be 1D")
    if array.size == 0:
        return np.zeros(0, dtype=np.intp), array.copy()
    # Indices where a value differs from its predecessor open a new run
    starts = np.concatenate(([0], np.flatnonzero(array[1:] != array[:-1]) + 1))
    counts = np.diff(np.append(starts, array.size))
    return counts, array[starts]


def decode_array(counts: np.ndarray, values: np.ndarray) -> np.ndarray:
    """
    Decode the output of `encode_array` back into a 1D array.

    Parameters
    ----------
    counts : np.ndarray
        Length of each run. Must be non-negative.
    values : np.ndarray
        Value of each run. Must have the same shape as counts.

    Returns
    -------
    np.ndarray
        The decoded array.
    """
    counts = np.asarray(counts)
    values = np.asarray(values)
    if counts.ndim != 1 or counts.shape != values.shape:
        raise ValueError("counts and values must be 1D and of the same length")
    if np.any(counts < 0):
        raise ValueError("counts must be non-negative")
    return np.repeat(values, counts)


def is_maximal(tokens: Sequence[Union[Rle[T], Tuple[int, T]]]) -> bool:
    """Checks that no two adjacent tokens describe the same value."""
    values = [token[1] if isinstance(token, tuple) else token.value for token in tokens]
    return all(a != b for a, b in zip(values, values[1:]))


EXAMPLE = list("aaaabccaadeeee")


def test_encode():
    assert encode(EXAMPLE) == [(4, "a"), (1, "b"), (2, "c"), (2, "a"), (1, "d"), (4, "e")]
    assert encode("x") == [(1, "x")]
    assert encode([]) == []


def test_mod_encode():
    expected = [Run(4, "a"), Single("b"), Run(2, "c"), Run(2, "a"), Single("d"), Run(4, "e")]
    assert mod_encode(EXAMPLE) == expected
    assert encode_direct(EXAMPLE) == expected
    assert retag(encode(EXAMPLE)) == expected
    assert mod_encode([]) == []
    assert encode_direct([]) == []
    # A second equal element promotes the pending Single rather than appending a new token
    assert mod_encode([7, 7]) == [Run(2, 7)]
    assert mod_encode([7, 8]) == [Single(7), Single(8)]


def test_decode():
    tokens = [Run(4, "a"), Single("b"), Run(2, "c"), Run(2, "a"), Single("d"), Run(4, "e")]
    assert decode(tokens) == EXAMPLE
    assert decode([]) == []
    # Non-maximal and mixed token sequences are expanded faithfully
    assert decode([(2, "a"), Run(3, "a"), Single("a"), Run(1, "b")]) == list("aaaaaab")
    assert decode([Run(0, "z"), (0, "y"), Single("x")]) == ["x"]


def test_is_maximal():
    assert is_maximal(encode(EXAMPLE))
    assert is_maximal(mod_encode(EXAMPLE))
    assert is_maximal([])
    assert not is_maximal([(1, "a"), (1, "a")])
    assert not is_maximal([Single("a"), Run(2, "a")])
    assert not is_maximal([(3, "b"), Single("c"), Run(2, "c")])


def test_decode_invalid():
    for bad_tokens, error in (([Run(-1, "a")], ValueError), ([(-2, "a")], ValueError), (["a"], TypeError),
                              ([(1, "a", "b")], TypeError)):
        try:
            decode(bad_tokens)
        except error:
            pass
        else:
            raise AssertionError(f"decode({bad_tokens!r}) did not raise {error.__name__}")


def test_encode_array():
    array = np.array([3, 3, 3, 0, 1, 1, 3], dtype=np.uint8)
    counts, values = encode_array(array)
    assert counts.tolist() == [3, 1, 2, 1]
    assert values.tolist() == [3, 0, 1, 3]
    assert values.dtype == np.uint8
    assert np.array_equal(decode_array(counts, values), array)

    counts, values = encode_array(np.array([], dtype=np.int32))
    assert counts.size == 0 and values.size == 0
    assert decode_array(counts, values).size == 0

    try:
        encode_array(np.zeros((2, 2)))
    except ValueError:
        pass
    else:
        raise AssertionError("encode_array accepted a 2D array")


def test_rle(num_tests=10, buffer_size=1000, out=None):
    import random

    def generate_random_sequence(size, unique_elements=5, max_run_length=16, singleton_probability=0.5):
        sequence = []
        while len(sequence) < size:
            if random.random() < singleton_probability:
                run_length = 1
            else:
                run_length = random.randint(1, min(max_run_length, size - len(sequence)))
            sequence.extend([random.randint(0, unique_elements-1)] * run_length)
        return sequence

    for _ in range(num_tests):
        original_data = generate_random_sequence(buffer_size)

        encoded_data = encode(original_data)
        decoded_data = decode(encoded_data)
        if out is not None:
            print('Encoded/Len: ', len(encoded_data), file=out)
            print('Decoded/Len: ', len(decoded_data), file=out)
            print('Compression ratio: ', len(original_data)/len(encoded_data), file=out)
        assert original_data == decoded_data, "RLE: Decoded data does not match original data"
        assert is_maximal(encoded_data), "RLE: Adjacent tokens share a value"

        encoded_data = mod_encode(original_data)
        decoded_data = decode(encoded_data)
        if out is not None:
            print('Encoded/Len: ', len(encoded_data), file=out)
            print('Decoded/Len: ', len(decoded_data), file=out)
            print('Compression ratio: ', len(original_data)/len(encoded_data), file=out)
        assert original_data == decoded_data, "RLE2: Decoded data does not match original data"
        assert is_maximal(encoded_data), "RLE2: Adjacent tokens share a value"
        assert encoded_data == encode_direct(original_data), "RLE2: Direct encoding differs"
        assert encoded_data == retag(encode(original_data)), "RLE2: Retagged encoding differs"

        counts, values = encode_array(np.array(original_data))
        assert list(zip(counts.tolist(), values.tolist())) == encode(original_data), "RLE array: Tokens differ"
        assert decode_array(counts, values).tolist() == original_data, \
                "RLE array: Decoded data does not match original data"

    if out is not None:
        print("All tests passed!", file=out)


if __name__ == "__main__":
    import sys
    test_encode()
    test_mod_encode()
    test_decode()
    test_decode_invalid()
    test_is_maximal()
    test_encode_array()
    test_rle(out=sys.stdout)
