"""
Linear-scan helpers over flat sequences: element access, reversal, palindromes, and grouping or repetition of
consecutive elements.

Every function returns a new list (or a single value) and leaves its input untouched. Out-of-range access returns
None instead of raising.
"""
from typing import List, Optional, Sequence, Tuple, TypeVar

T = TypeVar('T')


def last(sequence: Sequence[T]) -> Optional[T]:
    """Last element of sequence, or None if it is empty."""
    return sequence[-1] if sequence else None


def last_two(sequence: Sequence[T]) -> Optional[Tuple[T, T]]:
    """Last but one and last elements of sequence, or None if it has fewer than two elements."""
    if len(sequence) < 2:
        return None
    return sequence[-2], sequence[-1]


def element_at(sequence: Sequence[T], k: int) -> Optional[T]:
    """
    Gets the k'th element of a sequence.

    Parameters
    ----------
    sequence : Sequence[T]
        Sequence to index.
    k : int
        Position of the element, counting from 1.

    Returns
    -------
    Optional[T]
        The element, or None if k is not between 1 and len(sequence).
    """
    if 1 <= k <= len(sequence):
        return sequence[k - 1]
    return None


def length(sequence: Sequence[T]) -> int:
    return len(sequence)


def reverse(sequence: Sequence[T]) -> List[T]:
    return list(sequence[::-1])


def is_palindrome(sequence: Sequence[T]) -> bool:
    """True if sequence reads the same forwards and backwards. Sequences of length 0 or 1 are palindromes."""
    n = len(sequence)
    return all(sequence[i] == sequence[n - 1 - i] for i in range(n // 2))


def compress(sequence: Sequence[T]) -> List[T]:
    """Eliminates consecutive duplicates, keeping one element per run."""
    output = []
    for value in sequence:
        if not output or output[-1] != value:
            output.append(value)
    return output


def pack(sequence: Sequence[T]) -> List[List[T]]:
    """
    Packs consecutive duplicates into sublists.

    Parameters
    ----------
    sequence : Sequence[T]
        Sequence to pack.

    Returns
    -------
    List[List[T]]
        One sublist per maximal run, holding every element of the run.
    """
    output = []
    for value in sequence:
        if output and output[-1][-1] == value:
            output[-1].append(value)
        else:
            output.append([value])
    return output


def duplicate(sequence: Sequence[T]) -> List[T]:
    return replicate(sequence, 2)


def replicate(sequence: Sequence[T], n: int) -> List[T]:
    """Repeats each element n times, consecutively. n == 0 gives an empty list."""
    return [value for value in sequence for _ in range(n)]


def drop_every(sequence: Sequence[T], n: int) -> List[T]:
    """
    Drops every n'th element of a sequence.

    Parameters
    ----------
    sequence : Sequence[T]
        Sequence to filter.
    n : int
        Period of the elements to drop, counting from 1: n=3 drops the 3rd, 6th, 9th... elements. Every element is
        dropped if n <= 1.

    Returns
    -------
    List[T]
        The remaining elements, in order.
    """
    if n <= 1:
        return []
    return [value for i, value in enumerate(sequence, start=1) if i % n != 0]


def test_lists():
    assert last(["a", "b", "c", "d"]) == "d"
    assert last([]) is None
    assert last_two(["a", "b", "c", "d"]) == ("c", "d")
    assert last_two(["a"]) is None
    assert element_at(["a", "b", "c", "d", "e"], 3) == "c"
    assert element_at(["a"], 3) is None
    assert element_at(["a"], 0) is None
    assert length(["a", "b", "c"]) == 3
    assert length([]) == 0
    assert reverse(["a", "b", "c"]) == ["c", "b", "a"]
    assert is_palindrome(["x", "a", "m", "a", "x"])
    assert not is_palindrome(["a", "b"])
    assert is_palindrome([]) and is_palindrome(["a"])


def test_runs():
    data = list("aaaabccaadeeee")
    assert compress(data) == ["a", "b", "c", "a", "d", "e"]
    assert pack(list("aaaabccaaddeeee")) == [["a"]*4, ["b"], ["c"]*2, ["a"]*2, ["d"]*2, ["e"]*4]
    assert compress([]) == [] and pack([]) == []
    assert data == list("aaaabccaadeeee"), "Input was modified"


def test_repetition():
    assert duplicate(list("abccd")) == list("aabbccccdd")
    assert replicate(list("abc"), 3) == list("aaabbbccc")
    assert replicate(list("abc"), 0) == []
    assert drop_every(list("abcdefghij"), 3) == list("abdeghj")
    assert drop_every(list("abc"), 1) == []
    assert drop_every(list("abc"), 0) == []
    assert drop_every(list("ab"), 5) == ["a", "b"]


if __name__ == "__main__":
    test_lists()
    test_runs()
    test_repetition()
    print("All tests passed!")
