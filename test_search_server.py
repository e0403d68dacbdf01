#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Test document indexing and TF-IDF ranking
"""

import copy
import functools
import math

import pytest

from SearchServer import (
    Document,
    DocumentStatus,
    DuplicateOrInvalidIdError,
    IndexOutOfRangeError,
    MalformedInputError,
    MalformedQueryError,
    SearchServer,
)
from SearchServer.preprocessing.document import compute_average_rating


def make_server(**kwargs):
    search_server = SearchServer("and with", **kwargs)
    search_server.add_document(1, "funny pet and nasty rat", DocumentStatus.ACTUAL, [7, 2, 7])
    search_server.add_document(2, "funny pet with curly hair", DocumentStatus.ACTUAL, [1, 2, 3])
    search_server.add_document(3, "big cat nasty hair", DocumentStatus.ACTUAL, [1, 2, 8])
    return search_server


def assert_ranked(documents, epsilon=1e-6):
    for lhs, rhs in zip(documents, documents[1:]):
        assert lhs.relevance >= rhs.relevance - epsilon
        if abs(lhs.relevance - rhs.relevance) < epsilon:
            assert lhs.rating >= rhs.rating


def test_stop_word_and_unknown_word_ignored():
    documents = make_server().find_top_documents("curly dog and")
    assert len(documents) == 1
    assert documents[0].id == 2
    assert documents[0].rating == 2
    assert documents[0].relevance == pytest.approx(0.25 * math.log(3))


def test_equal_relevance_sorted_by_rating():
    documents = make_server().find_top_documents("funny nasty hair")
    assert [d.id for d in documents] == [1, 3, 2]
    assert_ranked(documents)


def test_nearly_equal_relevance_sorted_by_rating():
    search_server = make_server()
    low_rating = Document(1, 0.5, 1)
    high_rating = Document(2, 0.5 + 1e-9, 9)
    # Relevances closer than the tolerance count as equal
    assert low_rating.relevance != high_rating.relevance

    compare = functools.cmp_to_key(search_server._compare_documents)
    for documents in ([low_rating, high_rating], [high_rating, low_rating]):
        assert [d.id for d in sorted(documents, key=compare)] == [2, 1]

    far_apart = [Document(1, 0.5 + 1e-3, 1), Document(2, 0.5, 9)]
    assert [d.id for d in sorted(far_apart, key=compare)] == [1, 2]


def test_relevance_values():
    search_server = SearchServer("и в на")
    search_server.add_document(4, "белый кот и модный ошейник", DocumentStatus.ACTUAL, [8, -3])
    search_server.add_document(2, "пушистый кот пушистый хвост", DocumentStatus.ACTUAL, [7, 2, 7])
    search_server.add_document(3, "ухоженный пёс выразительные глаза", DocumentStatus.ACTUAL, [5, -12, 2, 1])
    search_server.add_document(1, "ухоженный скворец евгений", DocumentStatus.BANNED, [9])

    documents = search_server.find_top_documents("пушистый ухоженный кот")
    assert documents == [
        Document(2, pytest.approx(0.5 * math.log(4) + 0.25 * math.log(2)), 5),
        Document(4, pytest.approx(0.25 * math.log(2)), 2),
        Document(3, pytest.approx(0.25 * math.log(2)), -1),
    ]

    banned = search_server.find_top_documents("пушистый ухоженный кот", DocumentStatus.BANNED)
    assert [d.id for d in banned] == [1]
    assert banned[0].relevance == pytest.approx(math.log(2) / 3)

    even = search_server.find_top_documents(
        "пушистый ухоженный кот", lambda document_id, status, rating: document_id % 2 == 0
    )
    assert [d.id for d in even] == [2, 4]


def test_minus_word_excludes_document():
    search_server = SearchServer()
    search_server.add_document(1, "cat dog", DocumentStatus.ACTUAL, [5])
    search_server.add_document(2, "cat", DocumentStatus.ACTUAL, [1])
    search_server.add_document(3, "bird", DocumentStatus.ACTUAL, [1])

    assert [d.id for d in search_server.find_top_documents("cat")] == [2, 1]
    assert [d.id for d in search_server.find_top_documents("cat -dog")] == [2]


def test_minus_word_beats_highest_score():
    search_server = make_server()
    assert search_server.find_top_documents("funny pet")[0].id == 1
    assert search_server.find_top_documents("funny pet -rat")[0].id == 2

    for minus_word in ("rat", "curly", "nasty", "hair"):
        documents = search_server.find_top_documents(f"funny pet nasty hair curly rat -{minus_word}")
        containing = set(search_server.inverted_index.get_postings(minus_word))
        assert containing
        assert not containing & {d.id for d in documents}


def test_status_filters():
    search_server = make_server()
    search_server.add_document(4, "big dog cat Vladislav", DocumentStatus.IRRELEVANT, [-1, -2, -3])
    search_server.add_document(5, "big dog hamster Borya", DocumentStatus.BANNED, [4, 9, 3])

    assert [d.id for d in search_server.find_top_documents("big dog")] == [3]
    assert [d.id for d in search_server.find_top_documents("big dog", DocumentStatus.BANNED)] == [5]
    assert [d.id for d in search_server.find_top_documents("big dog", DocumentStatus.IRRELEVANT)] == [4]
    assert search_server.find_top_documents("big dog", DocumentStatus.REMOVED) == []

    by_rating = search_server.find_top_documents("big", lambda document_id, status, rating: rating > 2)
    assert [d.id for d in by_rating] == [5, 3]


def test_invalid_predicate_type():
    with pytest.raises(TypeError):
        make_server().find_top_documents("cat", "ACTUAL")


def test_result_count_is_bounded():
    search_server = SearchServer()
    for document_id in range(10):
        search_server.add_document(document_id, "cat " * (document_id + 1) + "tail", DocumentStatus.ACTUAL, [document_id])
    search_server.add_document(10, "dog", DocumentStatus.ACTUAL, [])

    documents = search_server.find_top_documents("cat")
    assert len(documents) == 5
    assert_ranked(documents)
    assert [d.id for d in documents] == [9, 8, 7, 6, 5]


def test_max_result_document_count_override():
    search_server = make_server(max_result_document_count=2)
    assert len(search_server.find_top_documents("funny nasty hair")) == 2

    configured = make_server(config={"search": {"max_result_document_count": 1}})
    assert len(configured.find_top_documents("funny nasty hair")) == 1

    for count in (0, -1):
        with pytest.raises(ValueError):
            SearchServer("and", max_result_document_count=count)


def test_repeated_queries_are_deterministic():
    first = make_server().find_top_documents("funny pet nasty hair -rat")
    second_server = make_server()
    assert second_server.find_top_documents("funny pet nasty hair -rat") == first
    assert second_server.find_top_documents("funny pet nasty hair -rat") == first


def test_empty_corpus_and_no_matches():
    assert SearchServer("and").find_top_documents("cat") == []
    assert make_server().find_top_documents("unicorn") == []
    assert make_server().find_top_documents("") == []


def test_malformed_queries_fail():
    search_server = make_server()
    with pytest.raises(MalformedQueryError):
        search_server.find_top_documents("--cat")
    with pytest.raises(MalformedQueryError):
        search_server.find_top_documents("funny -")
    with pytest.raises(MalformedInputError):
        search_server.find_top_documents("fun\x10ny")


def test_term_frequencies_sum_to_one():
    search_server = make_server()
    search_server.add_document(7, "fluffy cat fluffy tail and", DocumentStatus.ACTUAL, [])

    frequencies = search_server.inverted_index.get_word_frequencies(7)
    assert frequencies == {
        "fluffy": pytest.approx(0.5),
        "cat": pytest.approx(0.25),
        "tail": pytest.approx(0.25),
    }
    for document_id in search_server:
        frequencies = search_server.inverted_index.get_word_frequencies(document_id)
        assert sum(frequencies.values()) == pytest.approx(1.0)


def test_document_of_stop_words_only():
    search_server = make_server()
    search_server.add_document(8, "and with", DocumentStatus.ACTUAL, [3])
    assert search_server.get_document_count() == 4
    assert search_server.inverted_index.get_word_frequencies(8) == {}


def test_duplicate_id_does_not_change_state():
    search_server = make_server()
    index_before = copy.deepcopy(search_server.inverted_index.index)

    with pytest.raises(DuplicateOrInvalidIdError) as excinfo:
        search_server.add_document(1, "brand new words", DocumentStatus.BANNED, [10])
    assert excinfo.value.document_id == 1

    assert search_server.get_document_count() == 3
    assert search_server.inverted_index.index == index_before
    assert "brand" not in search_server.inverted_index


def test_negative_id_rejected():
    search_server = make_server()
    with pytest.raises(DuplicateOrInvalidIdError):
        search_server.add_document(-1, "cat", DocumentStatus.ACTUAL, [1])
    assert search_server.get_document_count() == 3


def test_control_character_in_document_rolls_back():
    search_server = make_server()
    index_before = copy.deepcopy(search_server.inverted_index.index)

    with pytest.raises(MalformedInputError) as excinfo:
        search_server.add_document(4, "big dog ha\x12mster", DocumentStatus.ACTUAL, [1])
    assert excinfo.value.token == "ha\x12mster"

    assert 4 not in search_server
    assert search_server.get_document_count() == 3
    assert search_server.inverted_index.index == index_before
    # The id is still free
    search_server.add_document(4, "big dog hamster", DocumentStatus.ACTUAL, [1])
    assert search_server.get_document_count() == 4


def test_control_character_in_stop_words():
    with pytest.raises(MalformedInputError):
        SearchServer("and w\x11ith")
    with pytest.raises(MalformedInputError):
        SearchServer(["and", "w\x11ith"])


def test_stop_words_from_iterable_and_string():
    assert SearchServer(["in", "", "at", "in"]).stop_words == {"in", "at"}
    assert SearchServer("  in at  in ").stop_words == {"in", "at"}


def test_get_document_id():
    search_server = SearchServer()
    for document_id in (42, 7, 13):
        search_server.add_document(document_id, "word", DocumentStatus.ACTUAL, [])

    assert [search_server.get_document_id(i) for i in range(3)] == [42, 7, 13]
    assert list(search_server) == [42, 7, 13]
    assert len(search_server) == 3

    with pytest.raises(IndexOutOfRangeError):
        search_server.get_document_id(3)
    with pytest.raises(IndexOutOfRangeError):
        search_server.get_document_id(-1)


def test_add_documents_from_dicts():
    search_server = SearchServer("and")
    search_server.add_documents([
        {"id": 1, "text": "cat and dog", "status": "actual", "ratings": [3, 4]},
        {"id": "2", "text": "dog", "status": "BANNED"},
    ])
    assert search_server.get_document_count() == 2
    assert [d.id for d in search_server.find_top_documents("dog", DocumentStatus.BANNED)] == [2]
    assert search_server.find_top_documents("cat")[0].rating == 3


def test_add_documents_reads_only_text_field():
    search_server = SearchServer()
    search_server.add_documents([{"id": 1, "content": "cat"}])
    assert search_server.get_document_count() == 1
    assert search_server.find_top_documents("cat") == []


@pytest.mark.parametrize("ratings, expected", [
    ([], 0),
    ([7, 2, 7], 5),
    ([8, -3], 2),
    ([5, -12, 2, 1], -1),
    ([-7, 2], -2),
    ([-1, -2, -3], -2),
])
def test_average_rating_truncates_toward_zero(ratings, expected):
    assert compute_average_rating(ratings) == expected
