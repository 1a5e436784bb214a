"""Tests for plan-level aggregation."""

import pytest
from planrisk.analysis.aggregator import analyze_plan, filter_resources, weighted_risk_score
from planrisk.ingest.plan_normalizer import normalize_plan


class TestEmptyPlan:
    """Test a plan with no resource changes."""
    
    def test_empty_plan(self):
        analysis = analyze_plan({"resource_changes": []})
        assert analysis.total_resources == 0
        assert analysis.overall_risk_score == 0
        assert analysis.overall_risk_level == "safe"
        assert analysis.cost_available is False
        assert analysis.cost_percent_change == 0
        assert analysis.resources == []
        assert analysis.warnings == []
        assert analysis.critical_issues == []
    
    def test_absent_list_is_empty(self):
        """The core treats a missing list as an empty plan."""
        assert analyze_plan({}).total_resources == 0


class TestSamplePlan:
    """Test aggregation over the bundled sample plan."""
    
    def test_counts(self, sample_analysis):
        assert sample_analysis.total_resources == 10
        assert sample_analysis.creates == 3
        assert sample_analysis.updates == 3
        assert sample_analysis.deletes == 2
        assert sample_analysis.replaces == 1
        assert sample_analysis.noops == 1
        assert sample_analysis.reads == 0
    
    def test_counts_sum_to_total(self, sample_analysis):
        a = sample_analysis
        assert a.creates + a.updates + a.deletes + a.replaces + a.noops + a.reads == a.total_resources
    
    def test_resource_order(self, sample_analysis):
        """Highest score first; equal scores keep plan order."""
        assert [(r.address, r.risk_score) for r in sample_analysis.resources] == [
            ("aws_db_instance.primary", 120),
            ("aws_s3_bucket.assets", 120),
            ("aws_efs_file_system.shared", 95),
            ("aws_security_group.web", 60),
            ("aws_iam_role.app_role", 55),
            ("aws_lambda_function.processor", 35),
            ("aws_instance.web[0]", 25),
            ("aws_instance.web[1]", 25),
            ("aws_route53_record.api", 25),
            ("aws_cloudwatch_log_group.app", 0),
        ]
    
    def test_database_replacement_reasons(self, sample_analysis):
        db = sample_analysis.resources[0]
        assert db.risk_reasons == [
            "Resource replacement (destroy then create)",
            "Stateful resource replace - potential data loss",
            "Production resource modification",
            "Attribute changes forcing replacement: instance_class",
            "Cost increase of 81%",
            "Replace operation on stateful resource - consider create_before_destroy lifecycle",
        ]
        assert db.has_lifecycle_issues
        assert db.cost_before == pytest.approx(61.14)
        assert db.cost_after == pytest.approx(110.78)
    
    def test_overall(self, sample_analysis):
        """Weighted average: (3*(120+120+95) + 2*60 + 55+35+25+25+25+0) / 17."""
        assert sample_analysis.overall_risk_score == pytest.approx(1290 / 17)
        assert sample_analysis.overall_risk_level == "critical"
    
    def test_critical_issues_and_warnings(self, sample_analysis):
        assert sample_analysis.critical_issues == [
            "aws_db_instance.primary (replace) — Resource replacement (destroy then create)",
            "aws_s3_bucket.assets (delete) — Resource deletion",
            "aws_efs_file_system.shared (delete) — Resource deletion",
        ]
        assert sample_analysis.warnings == [
            "aws_security_group.web (update) — Security group opens sensitive ports to public internet",
        ]
        assert [r.address for r in sample_analysis.high_risk_resources] == [
            "aws_db_instance.primary",
            "aws_s3_bucket.assets",
            "aws_efs_file_system.shared",
            "aws_security_group.web",
        ]
    
    def test_costs(self, sample_analysis):
        a = sample_analysis
        assert a.cost_available is True
        assert a.total_cost_before == pytest.approx(62.963)
        assert a.total_cost_after == pytest.approx(243.26)
        assert a.cost_delta == pytest.approx(a.total_cost_after - a.total_cost_before)
        for r in a.resources:
            assert r.cost_delta == pytest.approx(r.cost_after - r.cost_before)
    
    def test_idempotent(self, sample_plan):
        """Same plan, same output."""
        assert analyze_plan(sample_plan).to_dict() == analyze_plan(sample_plan).to_dict()
    
    def test_input_forms_agree(self, sample_plan):
        """Dict, TerraformPlan and a list of changes give the same result."""
        plan = normalize_plan(sample_plan)
        expected = analyze_plan(sample_plan).to_dict()
        assert analyze_plan(plan).to_dict() == expected
        assert analyze_plan(plan.resource_changes).to_dict() == expected


class TestOverallScore:
    """Test weighted scoring and plan-level level selection."""
    
    def test_score_clamped_to_100(self, make_resource):
        before = {"bucket": "b", "force_destroy": False, "versioning": {"enabled": True}, "tags": {"env": "prod"}}
        analysis = analyze_plan([make_resource("aws_s3_bucket", ["delete"], before=before)])
        assert analysis.resources[0].risk_score == 120
        assert analysis.overall_risk_score == 100
    
    def test_average_can_raise_plan_level(self, make_resource):
        """A lone medium resource (55) still makes a high-risk plan via the average."""
        before = {"managed_policy_arns": []}
        after = {"managed_policy_arns": ["arn:aws:iam::aws:policy/AdministratorAccess"]}
        analysis = analyze_plan([make_resource("aws_iam_role", ["update"], before=before, after=after)])
        assert analysis.resources[0].risk_level == "medium"
        assert analysis.overall_risk_level == "high"
        assert analysis.warnings == []
    
    def test_worst_resource_sets_floor(self, make_resource):
        """One critical resource among many safe ones keeps the plan critical."""
        changes = [make_resource("aws_vpc", ["no-op"], address=f"aws_vpc.v{i}") for i in range(20)]
        changes.append(make_resource("aws_efs_file_system", ["delete"], before={"tags": {"env": "production"}}))
        analysis = analyze_plan(changes)
        assert analysis.overall_risk_score < 70
        assert analysis.overall_risk_level == "critical"
    
    def test_weighted_score_empty(self, tables):
        assert weighted_risk_score([], tables) == 0.0
    
    def test_unpriced_plan_has_no_cost(self, make_resource):
        analysis = analyze_plan([make_resource("google_storage_bucket", ["create"], after={"name": "x"})])
        assert analysis.cost_available is False
        assert analysis.total_cost_after == 0


class TestFilterResources:
    """Test narrowing the resource list."""
    
    def test_search_is_case_insensitive(self, sample_analysis):
        found = filter_resources(sample_analysis.resources, search="WEB")
        assert [r.address for r in found] == ["aws_security_group.web", "aws_instance.web[0]", "aws_instance.web[1]"]
    
    def test_search_matches_type(self, sample_analysis):
        found = filter_resources(sample_analysis.resources, search="lambda")
        assert [r.address for r in found] == ["aws_lambda_function.processor"]
    
    def test_action_and_level(self, sample_analysis):
        found = filter_resources(sample_analysis.resources, action="delete", risk_level="critical")
        assert [r.address for r in found] == ["aws_s3_bucket.assets", "aws_efs_file_system.shared"]
    
    def test_no_filters_keeps_everything(self, sample_analysis):
        assert filter_resources(sample_analysis.resources) == sample_analysis.resources
