import click


from cli.simulate_governance import simulate_governance
from cli.mine_blocks import mine_blocks
from cli.get_proposal_state import get_proposal_state
from cli.hash_proposal import hash_proposal


@click.group()
@click.version_option(version="1.0.0")
@click.pass_context
def cli(ctx):
    pass


# Full proposal lifecycle
cli.add_command(simulate_governance, "simulate_governance")

# Test node helpers
cli.add_command(mine_blocks, "mine_blocks")

# Governor queries
cli.add_command(get_proposal_state, "get_proposal_state")
cli.add_command(hash_proposal, "hash_proposal")
