"""label-bump: next semantic version tag for a monorepo workload, from PR labels."""
