from app.domain.search.engine import SearchEngine, pattern_for, split_query


def _score(engine: SearchEngine, query: str, string: str):
	match = engine.total_score(string, [pattern_for(word) for word in split_query(query)])
	return match.score if match else None


def test_split_query_drops_empty_words():
	assert split_query("  paul   atreides ") == ["paul", "atreides"]
	assert split_query(" \t\n ") == []


def test_lowercase_query_matches_accents_and_any_case():
	engine = SearchEngine()
	results = engine.search("leo", ["Léonard Dupont", "Marc Lévy", "Cléo Martin"])
	assert {match.string for match in results} == {"Léonard Dupont", "Cléo Martin"}


def test_cedilla_is_folded():
	engine = SearchEngine()
	assert [m.string for m in engine.search("francois", ["François Morel"])] == ["François Morel"]


def test_uppercase_query_is_case_sensitive():
	engine = SearchEngine()
	assert engine.search("Leo", ["leonard"]) == []
	assert [m.string for m in engine.search("Leo", ["Leonard"])] == ["Leonard"]


def test_every_word_must_match():
	engine = SearchEngine()
	corpus = ["paul atreides muaddib", "paul smith", "rania hida ainar"]
	assert [m.string for m in engine.search("paul atr", corpus)] == ["paul atreides muaddib"]
	assert engine.search("paul xyz", corpus) == []


def test_special_characters_are_literal():
	engine = SearchEngine()
	assert engine.search("n.b", ["anxbc"]) == []
	assert [m.string for m in engine.search("n.b", ["an.bc"])] == ["an.bc"]


def test_word_boundaries_on_both_ends_score_eight_times_a_mid_word_match():
	engine = SearchEngine()
	boundary = _score(engine, "ann", "ann bcde")
	middle = _score(engine, "ann", "bannxcde")
	assert middle == 100 * 3 // 8
	assert boundary == 8 * middle


def test_word_start_only_scores_four_times():
	engine = SearchEngine()
	assert _score(engine, "ann", "annxbcde") == 4 * (100 * 3 // 8)


def test_digits_count_as_word_boundary():
	engine = SearchEngine()
	assert _score(engine, "jona", "jona82") == (100 * 4 // 6) * 4 * 2


def test_only_leftmost_match_is_scored():
	engine = SearchEngine()
	# the first "an" sits mid-word, the later standalone "an" is ignored
	assert _score(engine, "an", "banal an") == 100 * 2 // 8


def test_closer_to_whole_word_ranks_first():
	engine = SearchEngine()
	results = engine.search("ann", ["Annabelle", "Ann"])
	assert [m.string for m in results] == ["Ann", "Annabelle"]
	assert results[0].score == 800
	assert results[1].score == (100 * 3 // 9) * 4


def test_sub_query_scores_are_summed():
	engine = SearchEngine()
	total = _score(engine, "paul muad", "paul atreides muaddib")
	assert total == _score(engine, "paul", "paul atreides muaddib") + _score(engine, "muad", "paul atreides muaddib")


def test_custom_factors_and_limit():
	engine = SearchEngine(word_start_factor=1, word_end_factor=1)
	assert _score(engine, "ann", "ann bcde") == 100 * 3 // 8
	assert len(SearchEngine().search("a", ["a", "ab", "abc"], limit=2)) == 2


def test_blank_query_matches_nothing():
	assert SearchEngine().search("   ", ["anything"]) == []
