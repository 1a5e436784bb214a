"""GitHub PR comment formatting and posting."""

import requests
from ..contracts.analysis_output import PlanAnalysis
from ..presentation.human_formatter import format_money
from ..presentation.summary import generate_summary
from ..utils.errors import ReportError
from ..utils.logging import get_logger

logger = get_logger("report.github")

# Marker to identify planrisk comments
COMMENT_MARKER = "<!-- planrisk-report -->"

GITHUB_API = "https://api.github.com"

RISK_EMOJI = {
    "safe": "✅",
    "low": "✅",
    "medium": "⚠️",
    "high": "❌",
    "critical": "🛑",
}


def format_github_comment(analysis: PlanAnalysis) -> str:
    """
    Format PlanAnalysis as GitHub markdown comment.
    
    Args:
        analysis: PlanAnalysis from analysis
        
    Returns:
        Formatted GitHub markdown comment string
    """
    level = analysis.overall_risk_level
    comment_parts = [
        COMMENT_MARKER,
        "",
        "## Terraform Plan Risk Assessment",
        "",
        f"**Risk Level:** {RISK_EMOJI.get(level, '')} {level}",
        f"**Risk Score:** {analysis.overall_risk_score:.1f} / 100 across {analysis.total_resources} resources",
    ]
    if analysis.cost_available:
        comment_parts.append(
            f"**Estimated Cost Delta:** {format_money(analysis.cost_delta, signed=True)}/month "
            f"({analysis.cost_percent_change:+.1f}%, advisory)"
        )
    comment_parts.append("")
    
    if analysis.critical_issues:
        comment_parts.append("### Critical Issues")
        comment_parts.append("")
        comment_parts.extend(f"- {issue}" for issue in analysis.critical_issues)
        comment_parts.append("")
    
    if analysis.warnings:
        comment_parts.append("### Warnings")
        comment_parts.append("")
        comment_parts.extend(f"- {warning}" for warning in analysis.warnings)
        comment_parts.append("")
    
    # Per-resource detail in collapsible section
    comment_parts.extend([
        "<details>",
        "<summary>All resources</summary>",
        "",
        generate_summary(analysis),
        "",
    ])
    for r in analysis.resources:
        reasons = "; ".join(r.risk_reasons) if r.risk_reasons else "no risk factors"
        comment_parts.append(f"- `{r.address}` **{r.action}** {r.risk_level} ({r.risk_score}): {reasons}")
    comment_parts.extend(["", "</details>"])
    
    return "\n".join(comment_parts)


def post_pr_comment(
    repo: str,
    pr_number: int,
    comment: str,
    token: str,
    update: bool = False
) -> None:
    """
    Post comment to GitHub PR via REST API.
    
    Args:
        repo: Repository in format "owner/repo"
        pr_number: Pull request number
        comment: Comment body (markdown)
        token: GitHub personal access token
        update: If True, update existing comment instead of creating new one
        
    Raises:
        ReportError: If API call fails
    """
    if "/" not in repo:
        raise ReportError(f"Invalid repository format: {repo}. Expected 'owner/repo'")
    
    owner, repo_name = repo.split("/", 1)
    api_url = f"{GITHUB_API}/repos/{owner}/{repo_name}/issues/{pr_number}/comments"
    
    headers = {
        "Authorization": f"token {token}",
        "Accept": "application/vnd.github.v3+json",
        "Content-Type": "application/json"
    }
    
    if update:
        try:
            response = requests.get(api_url, headers=headers, timeout=30)
            response.raise_for_status()
            
            existing_id = None
            for comment_obj in response.json():
                if COMMENT_MARKER in (comment_obj.get("body") or ""):
                    existing_id = comment_obj["id"]
                    break
            
            if existing_id:
                update_url = f"{GITHUB_API}/repos/{owner}/{repo_name}/issues/comments/{existing_id}"
                update_response = requests.patch(
                    update_url,
                    headers=headers,
                    json={"body": comment},
                    timeout=30
                )
                update_response.raise_for_status()
                logger.info(f"Updated existing planrisk comment on PR #{pr_number}")
                return
        
        except requests.exceptions.RequestException as e:
            logger.warning(f"Failed to check for existing comments: {e}")
            # Continue to create new comment
    
    try:
        response = requests.post(
            api_url,
            headers=headers,
            json={"body": comment},
            timeout=30
        )
        response.raise_for_status()
        logger.info(f"Posted planrisk comment to PR #{pr_number}")
    
    except requests.exceptions.HTTPError as e:
        status = e.response.status_code if e.response is not None else None
        if status == 401:
            raise ReportError("GitHub authentication failed. Check your GITHUB_TOKEN.")
        elif status == 404:
            raise ReportError(f"Repository or PR not found: {repo}#{pr_number}")
        else:
            error_msg = e.response.text if e.response is not None else str(e)
            raise ReportError(f"GitHub API error: {error_msg}")
    
    except requests.exceptions.RequestException as e:
        raise ReportError(f"Failed to post GitHub comment: {e}")
