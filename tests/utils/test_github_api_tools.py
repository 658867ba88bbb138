#!/usr/bin/env python3
# The MIT License (MIT)
# Copyright © 2025 Entrius

"""
Unit tests for github_api_tools module.

Tests the GitHub REST calls used by a cleanup run:
- closed PR listing (params, parsing, error handling)
- branch lookup (found / 404 / other errors)
- ref deletion (204 / error statuses / transport errors)
- rate limit header parsing
"""

from unittest.mock import Mock, patch

import pytest
import requests

from branchnuker.errors import GitHubAPIError
from branchnuker.utils.github_api_tools import (
    GitHubClient,
    check_preemptive_rate_limit,
    make_headers,
    parse_rate_limit_headers,
)


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def client():
    return GitHubClient('acme', 'widgets', 'fake_github_token')


def _response(status_code, payload=None, headers=None, text=''):
    response = Mock(status_code=status_code, headers=headers or {}, text=text)
    response.json.return_value = payload
    return response


def _pr_payload(number, merged_at='2026-01-15T12:00:00Z', head='feature', base='master'):
    return {
        'number': number,
        'title': f'PR #{number}',
        'state': 'closed',
        'merged_at': merged_at,
        'html_url': f'https://github.com/acme/widgets/pull/{number}',
        'head': {'ref': head},
        'base': {'ref': base},
    }


def test_make_headers():
    headers = make_headers('abc')
    assert headers['Authorization'] == 'token abc'
    assert headers['Accept'] == 'application/vnd.github.v3+json'


# ============================================================================
# list_closed_pull_requests
# ============================================================================


class TestListClosedPullRequests:
    @patch('branchnuker.utils.github_api_tools.requests.get')
    def test_request_parameters(self, mock_get, client):
        mock_get.return_value = _response(200, [])

        client.list_closed_pull_requests(page=3, per_page=30)

        args, kwargs = mock_get.call_args
        assert args[0] == 'https://api.github.com/repos/acme/widgets/pulls'
        assert kwargs['params'] == {
            'state': 'closed',
            'sort': 'updated',
            'direction': 'desc',
            'page': 3,
            'per_page': 30,
        }
        assert kwargs['headers']['Authorization'] == 'token fake_github_token'
        assert kwargs['timeout'] == 30

    @patch('branchnuker.utils.github_api_tools.requests.get')
    def test_parses_pull_requests(self, mock_get, client):
        mock_get.return_value = _response(200, [_pr_payload(1, head='fix/a'), _pr_payload(2, merged_at=None)])

        prs = client.list_closed_pull_requests(1, 30)

        assert [pr.number for pr in prs] == [1, 2]
        assert prs[0].head_branch == 'fix/a'
        assert prs[0].base_branch == 'master'
        assert prs[0].is_merged is True
        assert prs[1].merged_at is None
        assert prs[1].is_merged is False

    @patch('branchnuker.utils.github_api_tools.requests.get')
    def test_empty_page(self, mock_get, client):
        mock_get.return_value = _response(200, [])
        assert client.list_closed_pull_requests(9, 30) == []

    @patch('branchnuker.utils.github_api_tools.requests.get')
    def test_error_status_raises(self, mock_get, client):
        mock_get.return_value = _response(401, {'message': 'Bad credentials'})

        with pytest.raises(GitHubAPIError) as exc_info:
            client.list_closed_pull_requests(1, 30)

        assert exc_info.value.status_code == 401
        assert 'Bad credentials' in str(exc_info.value)

    @patch('branchnuker.utils.github_api_tools.requests.get')
    def test_connection_error_raises(self, mock_get, client):
        mock_get.side_effect = requests.exceptions.ConnectionError('dns failure')

        with pytest.raises(GitHubAPIError) as exc_info:
            client.list_closed_pull_requests(1, 30)

        assert exc_info.value.status_code is None
        assert mock_get.call_count == 1


# ============================================================================
# get_branch / branch_exists
# ============================================================================


class TestGetBranch:
    @patch('branchnuker.utils.github_api_tools.requests.get')
    def test_found(self, mock_get, client):
        mock_get.return_value = _response(200, {'name': 'feature'})
        assert client.get_branch('feature') == {'name': 'feature'}
        assert client.branch_exists('feature') is True

    @patch('branchnuker.utils.github_api_tools.requests.get')
    def test_not_found(self, mock_get, client):
        mock_get.return_value = _response(404, {'message': 'Branch not found'})
        assert client.get_branch('gone') is None
        assert client.branch_exists('gone') is False

    @patch('branchnuker.utils.github_api_tools.requests.get')
    def test_slashes_are_kept_in_path(self, mock_get, client):
        mock_get.return_value = _response(200, {'name': 'feat/x y'})
        client.get_branch('feat/x y')
        assert mock_get.call_args[0][0] == 'https://api.github.com/repos/acme/widgets/branches/feat/x%20y'

    @patch('branchnuker.utils.github_api_tools.requests.get')
    def test_server_error_raises(self, mock_get, client):
        mock_get.return_value = _response(502, None, text='<html>502 Bad Gateway</html>')
        mock_get.return_value.json.side_effect = ValueError('no json')

        with pytest.raises(GitHubAPIError) as exc_info:
            client.branch_exists('feature')

        assert exc_info.value.status_code == 502
        assert '502 Bad Gateway' in exc_info.value.detail


# ============================================================================
# delete_ref
# ============================================================================


class TestDeleteRef:
    @patch('branchnuker.utils.github_api_tools.requests.delete')
    def test_success(self, mock_delete, client):
        mock_delete.return_value = _response(204)

        assert client.delete_ref('feature/done') is None
        assert mock_delete.call_args[0][0] == 'https://api.github.com/repos/acme/widgets/git/refs/heads/feature/done'

    @patch('branchnuker.utils.github_api_tools.requests.delete')
    def test_unprocessable_raises(self, mock_delete, client):
        mock_delete.return_value = _response(422, {'message': 'Reference does not exist'})

        with pytest.raises(GitHubAPIError) as exc_info:
            client.delete_ref('feature')

        assert exc_info.value.method == 'DELETE'
        assert exc_info.value.status_code == 422

    @patch('branchnuker.utils.github_api_tools.requests.delete')
    def test_timeout_raises(self, mock_delete, client):
        mock_delete.side_effect = requests.exceptions.Timeout('read timed out')

        with pytest.raises(GitHubAPIError):
            client.delete_ref('feature')


# ============================================================================
# Rate limit headers
# ============================================================================


class TestRateLimitHeaders:
    def test_parse(self):
        response = _response(200, headers={
            'X-RateLimit-Limit': '5000',
            'X-RateLimit-Remaining': '4999',
            'X-RateLimit-Reset': '1900000000',
        })
        info = parse_rate_limit_headers(response)
        assert info.limit == 5000
        assert info.remaining == 4999

    def test_missing_headers(self):
        assert parse_rate_limit_headers(_response(200)) is None

    def test_malformed_headers(self):
        response = _response(200, headers={'X-RateLimit-Limit': 'lots'})
        assert parse_rate_limit_headers(response) is None

    @patch('branchnuker.utils.github_api_tools.log')
    def test_warns_when_quota_low(self, mock_log):
        response = _response(200, headers={
            'X-RateLimit-Limit': '5000',
            'X-RateLimit-Remaining': '3',
            'X-RateLimit-Reset': '1900000000',
        })
        check_preemptive_rate_limit(response)
        mock_log.warning.assert_called_once()

    @patch('branchnuker.utils.github_api_tools.log')
    def test_quiet_when_quota_healthy(self, mock_log):
        response = _response(200, headers={
            'X-RateLimit-Limit': '5000',
            'X-RateLimit-Remaining': '4000',
            'X-RateLimit-Reset': '1900000000',
        })
        check_preemptive_rate_limit(response)
        mock_log.warning.assert_not_called()
