"""
Commands module for git-promote CLI

One thin command per workflow. Business logic lives in WorkflowManager.
"""

from .feature import create_feature_branch, update_feature_branch, consume_feature
from .development import update_development, sync_development_with_main
from .promote import promote_basic, promote_validated, development_to_release
from .hotfix import create_hotfix, update_main_with_hotfix

# Registry of all available commands
ALL_COMMANDS = {
    # Feature workflow
    'create-feature-branch': create_feature_branch,
    'update-feature-branch': update_feature_branch,
    'consume-feature': consume_feature,
    # Development
    'update-development': update_development,
    'sync-development-with-main': sync_development_with_main,
    # Promotion
    'promote-basic': promote_basic,
    'promote-validated': promote_validated,
    'development-to-release': development_to_release,
    # Emergency workflow
    'create-hotfix': create_hotfix,
    'update-main-with-hotfix': update_main_with_hotfix,
}

# Short names kept from the first version of the tool
ALIASES = {
    'ub': 'update-feature-branch',
    'ud': 'update-development',
    'fmd': 'promote-basic',
    'cfb': 'create-feature-branch',
    'cf': 'consume-feature',
    'promote': 'promote-validated',
    'dr': 'development-to-release',
    'm': 'sync-development-with-main',
    'ch': 'create-hotfix',
    'um': 'update-main-with-hotfix',
}

__all__ = [
    'create_feature_branch',
    'update_feature_branch',
    'consume_feature',
    'update_development',
    'sync_development_with_main',
    'promote_basic',
    'promote_validated',
    'development_to_release',
    'create_hotfix',
    'update_main_with_hotfix',
    'ALL_COMMANDS',
    'ALIASES',
]
