import pytest
from singlish import translate
from singlish.models import Diagnostic
from singlish.session import Session


@pytest.fixture
def session():
    return Session()


def test_every_keystroke_matches_a_full_translation(session):
    text = "oyaa monavadha karannee? ru. 5000k"
    for i in range(1, len(text) + 1):
        assert session.update(text[:i]) == translate(text[:i])


def test_backspacing_matches_a_full_translation(session):
    text = "api Fast Food ekakin udheeta kamu"
    session.update(text)
    for i in range(len(text) - 1, 0, -1):
        assert session.update(text[:i]) == translate(text[:i])


def test_finished_words_are_reused(session):
    session.update("mama kae")
    first = session.result.pairs[0]
    space = session.result.pairs[1]
    session.update("mama kaeema")
    assert session.result.pairs[0] is first
    assert session.result.pairs[1] is space
    assert session.reused == 2


def test_word_being_typed_is_not_stable(session):
    session.update("mama kae")
    assert session.stable_boundary == 5
    session.update("mama")
    assert session.stable_boundary == 0


def test_removing_the_space_fuses_the_words(session):
    assert session.update("ka e") == "ක එ"
    assert session.update("kae") == "කැ"
    assert len(session.result.pairs) == 1
    assert session.reused == 0


def test_editing_an_earlier_word_rerenders_it(session):
    session.update("mama kae")
    assert session.update("mata kae") == "මට කැ"
    assert session.reused == 0


def test_clearing_the_input_resets(session):
    session.update("mama kae")
    assert session.update("") == ""
    assert session.result.pairs == []
    assert session.stable_boundary == 0
    assert session.update("api") == "අපි"


def test_diagnostics_follow_the_text(session):
    session.update("mama q ")
    assert [d.fragment for d in session.result.diagnostics] == ["q"]
    session.update("mama ")
    assert session.result.diagnostics == []


def test_rejects_non_string(session):
    with pytest.raises(TypeError):
        session.update(42)


def test_typing_a_decomposed_accent_matches_a_full_translation(session):
    text = "api Poke\u0301mon sellam karamu"
    for i in range(1, len(text) + 1):
        assert session.update(text[:i]) == translate(text[:i])


def test_fresh_diagnostics_only_report_new_fragments(session):
    session.update("mama q")
    assert session.fresh_diagnostics == [Diagnostic("unmapped", "q", 5)]
    session.update("mama q ")
    assert session.fresh_diagnostics == []
    session.update("mama q zz")
    assert session.fresh_diagnostics == [Diagnostic("unmapped", "zz", 7)]
    session.update("")
    assert session.fresh_diagnostics == []
