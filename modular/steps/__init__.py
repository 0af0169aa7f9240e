"""
Provisioning steps.

Every module in this package registers its step classes with the
StepRegistry on import; the orchestrator imports them all.
"""
