# The MIT License (MIT)
# Copyright © 2025 Entrius

"""Tests for commit range fetching and path filtering."""

import pytest

from prtagger.errors import GitHubAPIError, TransientAPIError
from prtagger.tagger.commits import fetch_commit_range, filter_commits_by_paths


class TestFetchCommitRange:
    def test_without_baseline_only_head(self, host):
        commit_range = fetch_commit_range(host, 'o', 'r', None, 'head')

        assert commit_range.shas == ('head',)
        assert commit_range.base_sha is None
        assert host.calls == []

    def test_with_baseline_uses_comparison(self, host):
        host.comparisons[('base', 'head')] = ['c1', 'c2', 'head']

        commit_range = fetch_commit_range(host, 'o', 'r', 'base', 'head')

        assert commit_range.shas == ('c1', 'c2', 'head')
        assert commit_range.base_sha == 'base'
        assert 'base' not in commit_range.shas
        assert len(commit_range) == 3

    def test_empty_comparison(self, host):
        host.comparisons[('head', 'head')] = []

        assert fetch_commit_range(host, 'o', 'r', 'head', 'head').shas == ()


class TestFilterCommitsByPaths:
    def test_reference_scenario(self, host):
        host.commit_files['commit-id'] = ['path/to/your/file']

        assert filter_commits_by_paths(host, 'o', 'r', ['commit-id'], ['path/to/your/file']) == ['commit-id']

    def test_keeps_order_and_drops_non_matching(self, host):
        host.commit_files.update(
            {
                'c1': ['services/api/app.py'],
                'c2': ['README.md'],
                'c3': ['docs/guide.md', 'services/api/tests/test_app.py'],
            }
        )

        result = filter_commits_by_paths(host, 'o', 'r', ['c1', 'c2', 'c3'], ['services/api/**'])

        assert result == ['c1', 'c3']

    def test_any_pattern_qualifies(self, host):
        host.commit_files.update({'c1': ['a.txt'], 'c2': ['b/c.py']})

        assert filter_commits_by_paths(host, 'o', 'r', ['c1', 'c2'], ['*.md', 'b/*.py']) == ['c2']

    def test_empty_patterns_skip_file_lookups(self, host):
        assert filter_commits_by_paths(host, 'o', 'r', ['c1', 'c2'], []) == []
        assert host.calls == []

    def test_missing_commit_is_skipped(self, host):
        host.commit_files['c2'] = ['src/x.py']

        result = filter_commits_by_paths(host, 'o', 'r', ['rebased-away', 'c2'], ['src/*'])

        assert result == ['c2']

    def test_transient_error_aborts_pass(self, host):
        host.commit_files.update({'c1': ['src/x.py'], 'c2': ['src/y.py']})
        host.errors['files:c2'] = TransientAPIError('rate limited', status_code=429)

        with pytest.raises(TransientAPIError):
            filter_commits_by_paths(host, 'o', 'r', ['c1', 'c2'], ['src/*'])

    def test_api_error_aborts_pass(self, host):
        host.commit_files['c1'] = ['src/x.py']
        host.errors['files:c2'] = GitHubAPIError('Conflict', status_code=409)

        with pytest.raises(GitHubAPIError):
            filter_commits_by_paths(host, 'o', 'r', ['c1', 'c2'], ['src/*'])
