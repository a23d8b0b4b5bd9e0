from error_trigram_study.analysis.trigrams import index_corpus, tokenize, trigrams


def test_tokenize_splits_on_whitespace_runs():
    assert tokenize("  Error\tin \n foo  ") == ["Error", "in", "foo"]
    assert tokenize("") == []
    assert tokenize("   ") == []


def test_trigrams_keep_punctuation_and_case():
    out = list(trigrams("Error in if (x) : missing value"))
    assert out == [
        "Error in if",
        "in if (x)",
        "if (x) :",
        "(x) : missing",
        ": missing value",
    ]


def test_exactly_three_tokens_gives_one_trigram():
    assert list(trigrams("Error in x")) == ["Error in x"]


def test_short_strings_give_no_trigrams():
    assert list(trigrams("Error: boom")) == []
    assert list(trigrams("Error")) == []
    assert list(trigrams("")) == []


def test_whitespace_is_normalized_in_join():
    assert list(trigrams("Error\n\n  in\tfoo")) == ["Error in foo"]


def test_index_corpus_chains_all_strings():
    corpus = ["a b c d", "x y", "p q r"]
    assert list(index_corpus(corpus)) == ["a b c", "b c d", "p q r"]
