import argparse
import logging
import time

import numpy as np

from nested import flatten, from_nested
from rle import decode, decode_array, encode, encode_array, encode_direct, mod_encode

logging.basicConfig(format='benchmark -- %(message)s')
LOGGER = logging.getLogger('benchmark')
LOGGER.setLevel(logging.INFO)

NUM_TESTS = 10
BUFFER_SIZE = 100000
UNIQUE_ELEMENTS = 5
MAX_RUN_LENGTH = 16
SINGLETON_PROBABILITY = 0.5
SEED = 42

ENCODERS = (
    ('encode', encode),
    ('mod_encode', mod_encode),
    ('encode_direct', encode_direct),
)


def generate_runs(rng, size, unique_elements, max_run_length, singleton_probability):
    """Random sequence made of runs: singletons with singleton_probability, else runs of up to max_run_length."""
    lengths = np.where(rng.random(size) < singleton_probability, 1, rng.integers(1, max_run_length + 1, size))
    lengths = lengths[:np.searchsorted(np.cumsum(lengths), size) + 1]
    values = rng.integers(0, unique_elements, lengths.size)
    return np.repeat(values, lengths)[:size]


def time_call(function, *args):
    start = time.perf_counter()
    result = function(*args)
    return result, time.perf_counter() - start


def main():
    parser = argparse.ArgumentParser(description="Round-trip random sequences through the run-length encoders")
    parser.add_argument("--tests", type=int, default=NUM_TESTS, help="number of random sequences")
    parser.add_argument("--size", type=int, default=BUFFER_SIZE, help="length of each sequence")
    parser.add_argument("--symbols", type=int, default=UNIQUE_ELEMENTS, help="number of distinct values")
    parser.add_argument("--max-run", type=int, default=MAX_RUN_LENGTH, help="longest generated run")
    parser.add_argument("--singletons", type=float, default=SINGLETON_PROBABILITY,
                        help="probability that a generated run has length 1")
    parser.add_argument("--seed", type=int, default=SEED)
    parser.add_argument("--verbose", action="store_true", help="report every test case")
    args = parser.parse_args()

    if args.verbose:
        LOGGER.setLevel(logging.DEBUG)

    rng = np.random.default_rng(args.seed)
    elements_total = 0
    tokens_total = {name: 0 for name, _ in ENCODERS}
    seconds_total = {name: 0. for name, _ in ENCODERS + (('encode_array', None),)}

    for tc in range(args.tests):
        array = generate_runs(rng, args.size, args.symbols, args.max_run, args.singletons)
        # Sequences reach the encoders through the flattener, as nested chunks of plain values
        chunks = [array[i:i + 1000].tolist() for i in range(0, array.size, 1000)]
        sequence = flatten(from_nested(chunks))
        assert sequence == array.tolist()
        elements_total += len(sequence)

        for name, encoder in ENCODERS:
            tokens, seconds = time_call(encoder, sequence)
            # Checks if the decoded sequence is equal to the original one
            assert decode(tokens) == sequence, f"{name}: Decoded data does not match original data"
            tokens_total[name] += len(tokens)
            seconds_total[name] += seconds
            LOGGER.debug("Test case %d %s: %d tokens, ratio %.3f, %.4fs",
                         tc, name, len(tokens), len(sequence) / max(len(tokens), 1), seconds)

        (counts, values), seconds = time_call(encode_array, array)
        assert np.array_equal(decode_array(counts, values), array), "encode_array: Decoded data does not match"
        seconds_total['encode_array'] += seconds
        LOGGER.debug("Test case %d encode_array: %d runs, %.4fs", tc, counts.size, seconds)

    LOGGER.info("Total elements: %d", elements_total)
    for name, _ in ENCODERS:
        LOGGER.info("%s: %d tokens, ratio %.3f, %.4fs", name, tokens_total[name],
                    elements_total / max(tokens_total[name], 1), seconds_total[name])
    LOGGER.info("encode_array: %.4fs", seconds_total['encode_array'])


if __name__ == "__main__":
    main()
