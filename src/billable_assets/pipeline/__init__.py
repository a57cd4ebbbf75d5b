"""
Pipeline Package - Contract Scope Orchestration.

Components:
    - ContractScopeResolver: Group filtering + MW summary per contract
    - ContractScope: Billable assets of a contract for one cycle
"""

from billable_assets.pipeline.contract_scope import ContractScope, ContractScopeResolver

__all__ = ["ContractScope", "ContractScopeResolver"]
