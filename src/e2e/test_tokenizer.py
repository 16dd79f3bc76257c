import pytest
from singlish.loader import load_tables
from singlish.models import TokenKind
from singlish.tokenizer import tokenize


@pytest.fixture(scope="module")
def lexicon():
    return load_tables().lexicon


def _kinds(tokens):
    return [(t.kind, t.text) for t in tokens]


def test_empty_input_has_no_tokens(lexicon):
    assert tokenize("", lexicon) == []


def test_token_texts_rebuild_the_input(lexicon):
    text = "  mama,\tru. 5000k\n8ta  Fast?? සිංහල!!"
    tokens = tokenize(text, lexicon)
    assert "".join(t.text for t in tokens) == text
    # starts are contiguous
    pos = 0
    for t in tokens:
        assert t.start == pos
        pos = t.end
    assert pos == len(text)


def test_abbreviation_absorbs_its_dot(lexicon):
    assert _kinds(tokenize("ru. 5000k maaru oonaee", lexicon)) == [
        (TokenKind.PHONETIC, "ru."),
        (TokenKind.WHITESPACE, " "),
        (TokenKind.NUMBER, "5000k"),
        (TokenKind.WHITESPACE, " "),
        (TokenKind.PHONETIC, "maaru"),
        (TokenKind.WHITESPACE, " "),
        (TokenKind.PHONETIC, "oonaee"),
    ]


def test_plain_sentence_dot_is_punctuation(lexicon):
    assert _kinds(tokenize("nisaa. ammaa", lexicon))[:2] == [
        (TokenKind.PHONETIC, "nisaa"),
        (TokenKind.PUNCTUATION, "."),
    ]


def test_number_followed_by_word_splits(lexicon):
    assert _kinds(tokenize("8ta", lexicon)) == [
        (TokenKind.NUMBER, "8"),
        (TokenKind.PHONETIC, "ta"),
    ]


def test_number_unit_only_when_no_letter_follows(lexicon):
    assert _kinds(tokenize("5000kg", lexicon)) == [
        (TokenKind.NUMBER, "5000"),
        (TokenKind.PHONETIC, "kg"),
    ]
    assert _kinds(tokenize("5000k!", lexicon))[0] == (TokenKind.NUMBER, "5000k")


def test_capitalised_and_listed_loan_words_are_foreign(lexicon):
    kinds = dict((t.text, t.kind) for t in tokenize("magee Instagram account eka", lexicon))
    assert kinds["Instagram"] is TokenKind.FOREIGN
    assert kinds["account"] is TokenKind.FOREIGN
    assert kinds["magee"] is TokenKind.PHONETIC


def test_dictionary_beats_capitalisation(lexicon):
    assert tokenize("Inne", lexicon)[0].kind is TokenKind.PHONETIC


def test_capitalisation_rule_can_be_switched_off(lexicon, monkeypatch):
    import singlish.config as CFG
    monkeypatch.setattr(CFG, "CAPITALIZED_IS_FOREIGN", False)
    assert tokenize("Mama", lexicon)[0].kind is TokenKind.PHONETIC


def test_whitespace_runs_kept_verbatim(lexicon):
    tokens = tokenize("mata  \n natanna", lexicon)
    assert tokens[1].kind is TokenKind.WHITESPACE
    assert tokens[1].text == "  \n "


def test_other_scripts_pass_through_as_one_run(lexicon):
    tokens = tokenize("mama සිංහල", lexicon)
    assert _kinds(tokens)[-1] == (TokenKind.FOREIGN, "සිංහල")


def test_tail_tokenization_uses_absolute_positions(lexicon):
    tokens = tokenize("mama kae", lexicon, start=5)
    assert [(t.text, t.start) for t in tokens] == [("kae", 5)]


def test_accented_words_stay_whole_and_foreign(lexicon):
    for word in ("Pokémon", "Zürich", "Citroën", "café", "Poke\u0301mon"):
        assert _kinds(tokenize(word, lexicon)) == [(TokenKind.FOREIGN, word)]


def test_accented_word_between_singlish_words(lexicon):
    assert _kinds(tokenize("api Pokémon sellam", lexicon)) == [
        (TokenKind.PHONETIC, "api"),
        (TokenKind.WHITESPACE, " "),
        (TokenKind.FOREIGN, "Pokémon"),
        (TokenKind.WHITESPACE, " "),
        (TokenKind.PHONETIC, "sellam"),
    ]
