from royalemeta.services.session import AnalysisSession


class TestRecentTags:
    def test_most_recent_first(self) -> None:
        session = AnalysisSession()
        session.remember_tag("#A")
        session.remember_tag("#B")
        assert session.recent_tags == ["#B", "#A"]

    def test_repeat_moves_to_front(self) -> None:
        session = AnalysisSession()
        for tag in ["#A", "#B", "#C", "#A"]:
            session.remember_tag(tag)
        assert session.recent_tags == ["#A", "#C", "#B"]

    def test_capped_at_limit(self) -> None:
        session = AnalysisSession()
        for i in range(8):
            session.remember_tag(f"#T{i}")
        assert session.recent_tags == ["#T7", "#T6", "#T5", "#T4", "#T3"]

    def test_ignores_empty(self) -> None:
        session = AnalysisSession()
        session.remember_tag("")
        session.remember_tag("#")
        assert session.recent_tags == []

    def test_forget(self) -> None:
        session = AnalysisSession()
        session.remember_tag("#A")
        session.remember_tag("#B")
        assert session.forget_tag("#A") == ["#B"]
        assert session.forget_tag("#missing") == ["#B"]


class TestGenerationGuard:
    def test_stale_results_discarded(self, make_profile) -> None:
        session = AnalysisSession()
        first = session.begin_analysis()
        second = session.begin_analysis()

        assert not session.commit_results(first, [])
        assert session.results is None
        assert session.commit_results(second, [])
        assert session.results == []
        assert session.progress == 100

    def test_profile_change_supersedes_analysis(self, make_profile) -> None:
        session = AnalysisSession()
        token = session.begin_analysis()

        session.set_profile(make_profile({1: 10}))

        assert not session.report_progress(token, 50)
        assert not session.commit_results(token, [])
        assert not session.running
        assert session.progress == 0

    def test_progress_never_decreases(self) -> None:
        session = AnalysisSession()
        token = session.begin_analysis()
        session.report_progress(token, 40)
        session.report_progress(token, 30)
        assert session.progress == 40
        session.report_progress(token, 140)
        assert session.progress == 100

    def test_finish_only_current(self) -> None:
        session = AnalysisSession()
        first = session.begin_analysis()
        session.begin_analysis()

        session.finish(first)
        assert session.running

    def test_set_profile_clears_results(self, make_profile) -> None:
        session = AnalysisSession()
        token = session.begin_analysis()
        session.commit_results(token, [])

        session.set_profile(make_profile({}))

        assert session.results is None
