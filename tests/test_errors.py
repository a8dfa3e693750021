"""Tests for src/errors.py — exception taxonomy and BuildReport."""

from pathlib import Path

from notesfeed.errors import (
    BuildReport,
    ContentCompilationError,
    FeedBuildError,
    FeedWriteError,
    RenderError,
    load_report,
    save_report,
)


class TestExceptions:
    def test_hierarchy(self):
        for exc_type in (ContentCompilationError, RenderError, FeedWriteError):
            assert issubclass(exc_type, FeedBuildError)

    def test_compilation_error_carries_path(self):
        err = ContentCompilationError("bad yaml", path="content/notes/a.md")
        assert err.path == Path("content/notes/a.md")
        assert "a.md" in str(err)
        assert err.stage == "load"

    def test_render_error_carries_slug(self):
        err = RenderError("boom", slug="hello")
        assert err.slug == "hello"
        assert str(err) == "hello: boom"

    def test_write_error(self):
        err = FeedWriteError("disk full", path="public/feeds/feed.xml")
        assert err.stage == "write"
        assert "feed.xml" in str(err)


class TestBuildReport:
    def test_empty_report_success(self):
        report = BuildReport()
        assert report.success is True
        assert report.failure is None

    def test_record_failure(self):
        report = BuildReport()
        report.record_failure(RenderError("broken", slug="x"))
        assert report.success is False
        assert report.failure.stage == "render"
        assert report.failure.error_type == "RenderError"

    def test_record_failure_plain_exception(self):
        report = BuildReport()
        report.record_failure(ValueError("nope"))
        assert report.failure.stage == "build"

    def test_summary_text_success(self):
        report = BuildReport(posts_processed=3, outputs_written=["a", "b", "c"])
        report.finish()
        text = report.summary_text()
        assert "completed" in text
        assert "Posts: 3" in text
        assert "3 files" in text

    def test_summary_text_failure(self):
        report = BuildReport()
        report.record_failure(FeedWriteError("denied", path="x.xml"))
        text = report.summary_text()
        assert "failed" in text
        assert "[FATAL] write" in text


class TestSaveLoadReport:
    def test_save_and_load(self, tmp_path):
        report = BuildReport(posts_processed=2)
        report.finish()
        save_report(report, tmp_path)
        loaded = load_report(tmp_path)
        assert loaded is not None
        assert loaded.posts_processed == 2

    def test_load_nonexistent(self, tmp_path):
        assert load_report(tmp_path) is None

    def test_load_corrupt(self, tmp_path):
        (tmp_path / ".notesfeed-last-build.json").write_text("not json")
        assert load_report(tmp_path) is None
