"""SuperAI brain: plan, dispatch and evaluate work across specialized agents."""
