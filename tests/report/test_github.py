"""Tests for GitHub PR comment formatting and posting."""

from unittest.mock import Mock, patch
import pytest
import requests
from planrisk.report.github import format_github_comment, post_pr_comment, COMMENT_MARKER
from planrisk.utils.errors import ReportError


def _http_error(status_code):
    response = Mock(status_code=status_code, text="boom")
    return requests.exceptions.HTTPError(response=response)


class TestDeterminism:
    """Test that same analysis produces same GitHub comment."""
    
    def test_github_comment_determinism(self, sample_analysis):
        """Same analysis → same comment string."""
        comment1 = format_github_comment(sample_analysis)
        comment2 = format_github_comment(sample_analysis)
        
        assert comment1 == comment2, "GitHub comment must be deterministic"
    
    def test_github_comment_contains_marker(self, sample_analysis):
        """Comment must contain planrisk marker."""
        comment = format_github_comment(sample_analysis)
        assert COMMENT_MARKER in comment, "Comment must contain planrisk marker"
    
    def test_github_comment_structure(self, sample_analysis):
        """Comment must have expected structure."""
        comment = format_github_comment(sample_analysis)
        
        assert "## Terraform Plan Risk Assessment" in comment
        assert "**Risk Level:**" in comment
        assert "**Estimated Cost Delta:**" in comment
        assert "### Critical Issues" in comment
        assert "<details>" in comment


class TestGitHubAPIContract:
    """Test GitHub API integration contract (mocked)."""
    
    @patch('planrisk.report.github.requests.post')
    @patch('planrisk.report.github.requests.get')
    def test_post_comment_calls_correct_endpoint(self, mock_get, mock_post, sample_analysis):
        """Test that POST request uses correct GitHub API endpoint."""
        mock_post.return_value = Mock(status_code=201)
        mock_post.return_value.raise_for_status = Mock()
        
        comment = format_github_comment(sample_analysis)
        post_pr_comment("owner/repo", 123, comment, "test_token")
        
        assert mock_post.called, "POST request must be made"
        assert not mock_get.called, "GET is only used when updating"
        
        call_args = mock_post.call_args
        assert "api.github.com/repos/owner/repo/issues/123/comments" in call_args[0][0]
    
    @patch('planrisk.report.github.requests.post')
    def test_post_comment_includes_auth_header(self, mock_post, sample_analysis):
        """Test that request includes Authorization header."""
        mock_post.return_value = Mock(status_code=201)
        mock_post.return_value.raise_for_status = Mock()
        
        post_pr_comment("owner/repo", 123, format_github_comment(sample_analysis), "test_token_123")
        
        headers = mock_post.call_args[1].get('headers', {})
        assert headers['Authorization'] == "token test_token_123", "Token must be in header"
    
    @patch('planrisk.report.github.requests.post')
    def test_post_comment_includes_marker(self, mock_post, sample_analysis):
        """Test that posted comment contains planrisk marker."""
        mock_post.return_value = Mock(status_code=201)
        mock_post.return_value.raise_for_status = Mock()
        
        post_pr_comment("owner/repo", 123, format_github_comment(sample_analysis), "test_token")
        
        body = mock_post.call_args[1].get('json', {}).get('body', '')
        assert COMMENT_MARKER in body, "Posted comment must contain planrisk marker"
    
    @patch('planrisk.report.github.requests.patch')
    @patch('planrisk.report.github.requests.post')
    @patch('planrisk.report.github.requests.get')
    def test_update_existing_comment(self, mock_get, mock_post, mock_patch, sample_analysis):
        """Test that update=True patches the existing comment."""
        existing_comment = {
            "id": 456,
            "body": f"{COMMENT_MARKER}\nOld comment"
        }
        mock_get.return_value = Mock(status_code=200, json=lambda: [existing_comment])
        mock_get.return_value.raise_for_status = Mock()
        
        mock_patch.return_value = Mock(status_code=200)
        mock_patch.return_value.raise_for_status = Mock()
        
        post_pr_comment("owner/repo", 123, format_github_comment(sample_analysis), "test_token", update=True)
        
        assert mock_patch.called, "PATCH must be called for update"
        assert not mock_post.called, "POST must not be called when updating"
        
        patch_url = mock_patch.call_args[0][0]
        assert "api.github.com/repos/owner/repo/issues/comments/456" in patch_url
    
    @patch('planrisk.report.github.requests.post')
    @patch('planrisk.report.github.requests.get')
    def test_update_without_existing_comment_posts(self, mock_get, mock_post, sample_analysis):
        """No marked comment found: fall back to creating one."""
        mock_get.return_value = Mock(status_code=200, json=lambda: [{"id": 1, "body": "unrelated"}])
        mock_get.return_value.raise_for_status = Mock()
        mock_post.return_value = Mock(status_code=201)
        mock_post.return_value.raise_for_status = Mock()
        
        post_pr_comment("owner/repo", 123, "body", "test_token", update=True)
        
        assert mock_post.called
    
    def test_invalid_repo_format(self):
        with pytest.raises(ReportError, match="Invalid repository format"):
            post_pr_comment("just-a-name", 1, "body", "token")
    
    @pytest.mark.parametrize("status,message", [
        (401, "authentication failed"),
        (404, "not found"),
        (500, "GitHub API error"),
    ])
    @patch('planrisk.report.github.requests.post')
    def test_http_errors(self, mock_post, status, message):
        """HTTP failures become ReportError."""
        mock_post.return_value = Mock()
        mock_post.return_value.raise_for_status = Mock(side_effect=_http_error(status))
        
        with pytest.raises(ReportError, match=message):
            post_pr_comment("owner/repo", 1, "body", "token")
    
    @patch('planrisk.report.github.requests.post')
    def test_connection_error(self, mock_post):
        mock_post.side_effect = requests.exceptions.ConnectionError("offline")
        
        with pytest.raises(ReportError, match="Failed to post GitHub comment"):
            post_pr_comment("owner/repo", 1, "body", "token")
