"""Tests for the public package API."""

from pathlib import Path
import pytest
from planrisk import analyze, analyze_file, analyze_text, PlanAnalysis
from planrisk.utils.errors import PlanLoadError, PlanRiskError


class TestAnalyze:
    """Test analyze entry points."""
    
    def test_analyze_returns_camel_case_dict(self, sample_plan_file):
        result = analyze(sample_plan_file)
        assert isinstance(result, dict)
        assert result["version"] == "1.0.0"
        assert result["totalResources"] == 10
        assert result["overallRiskLevel"] == "critical"
        assert result["resources"][0]["riskReasons"]
        assert "highRiskResources" in result
    
    def test_analyze_file_returns_model(self, sample_plan_file):
        analysis = analyze_file(sample_plan_file)
        assert isinstance(analysis, PlanAnalysis)
        assert analysis.critical_issues
    
    def test_analysis_round_trips_through_dict(self, sample_plan_file):
        """Saved JSON reloads into an equal model."""
        analysis = analyze_file(sample_plan_file)
        assert PlanAnalysis(**analysis.to_dict()) == analysis
    
    def test_analyze_text(self):
        analysis = analyze_text('{"resource_changes": []}')
        assert analysis.total_resources == 0
        assert analysis.overall_risk_level == "safe"
    
    def test_malformed_input(self):
        with pytest.raises(PlanLoadError):
            analyze_text('{"planned_values": {}}')
    
    def test_missing_file(self):
        with pytest.raises(PlanRiskError, match="Plan file not found"):
            analyze("does-not-exist.json")


class TestOverrideIsolation:
    """Override files are read from the working directory and home only."""
    
    def test_runs_in_isolated_directory(self, no_user_overrides):
        """Tests never see a developer's own override files."""
        assert Path.cwd() == no_user_overrides
        assert Path.home() == no_user_overrides / "home"
    
    def test_project_override_applies(self, no_user_overrides, sample_plan_file):
        config_dir = no_user_overrides / ".planrisk"
        config_dir.mkdir()
        (config_dir / "config.yaml").write_text("scores:\n  actions:\n    create: 0\n", encoding='utf-8')
        
        result = analyze(sample_plan_file)
        route53 = [r for r in result["resources"] if r["address"] == "aws_route53_record.api"][0]
        assert route53["riskScore"] == 15
    
    def test_defaults_without_override_files(self, sample_plan_file):
        result = analyze(sample_plan_file)
        route53 = [r for r in result["resources"] if r["address"] == "aws_route53_record.api"][0]
        assert route53["riskScore"] == 25
