from elastinode.provisioning.retry import RetryPolicy


def test_default_budget_is_five_minutes():
    policy = RetryPolicy()

    assert policy.budget_seconds == 300
    assert list(policy.attempts())[0] == 1
    assert list(policy.attempts())[-1] == 60
