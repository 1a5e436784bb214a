"""Tests for markdown report generation."""

from pathlib import Path
import tempfile
import pytest
from planrisk.contracts.analysis_output import PlanAnalysis
from planrisk.report.markdown import generate_markdown, render_markdown
from planrisk.utils.errors import ReportError


class TestDeterminism:
    """Test that same analysis produces same markdown report."""
    
    def test_markdown_determinism(self, sample_analysis):
        """Same analysis → same markdown file content."""
        with tempfile.TemporaryDirectory() as tmpdir:
            output_path1 = Path(tmpdir) / "report1.md"
            output_path2 = Path(tmpdir) / "report2.md"
            
            generate_markdown(sample_analysis, output_path1)
            generate_markdown(sample_analysis, output_path2)
            
            content1 = output_path1.read_text(encoding='utf-8')
            content2 = output_path2.read_text(encoding='utf-8')
            
            assert content1 == content2, "Markdown reports must be identical"
    
    def test_markdown_structure(self, sample_analysis):
        """Markdown report must have expected structure."""
        content = render_markdown(sample_analysis)
        
        assert "# Terraform Plan Risk Assessment" in content
        assert "## Summary" in content
        assert "## Cost Impact" in content
        assert "## Critical Issues" in content
        assert "## Warnings" in content
        assert "| `aws_db_instance.primary` | replace | critical | 120 |" in content
    
    def test_empty_analysis(self):
        content = render_markdown(PlanAnalysis())
        assert "No resource changes." in content
        assert "Cost estimate not available." in content
        assert content.count("None detected.") == 2
    
    def test_creates_parent_directory(self, sample_analysis, tmp_path):
        output_path = tmp_path / "nested" / "dir" / "report.md"
        generate_markdown(sample_analysis, output_path)
        assert output_path.exists()
    
    def test_write_failure(self, sample_analysis, tmp_path):
        """Writing to a directory path fails with ReportError."""
        with pytest.raises(ReportError):
            generate_markdown(sample_analysis, tmp_path)
