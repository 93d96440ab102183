# cli/commands/index.py
import click
from bookshare.services.index_audit import IndexAuditor
from ..utils import command_session

@click.group()
def index():
    """Chat partner index maintenance"""
    pass

@index.command()
@click.pass_context
def audit(ctx):
    """Report chat partner entries that disagree with the stored chat rooms"""
    with command_session(ctx) as session:
        problems = IndexAuditor(session).audit()
        if not problems:
            click.echo(click.style("Chat partner index is consistent", fg='green'))
            return
        click.echo(click.style(f"\nFound {len(problems)} problems:", fg='yellow'))
        for problem in problems:
            click.echo(click.style(f" - {problem.describe()}", fg='red'))
        ctx.exit(1)

@index.command()
@click.pass_context
def repair(ctx):
    """Add missing mirrored chat partner entries and pair likes left without a chat room"""
    with command_session(ctx) as session:
        auditor = IndexAuditor(session)
        added = auditor.repair_mirrors()
        click.echo(click.style("Added ", fg='blue') + click.style(str(added), fg='cyan') +
                   click.style(" mirrored entries", fg='blue'))
        paired = auditor.repair_unpaired_likes()
        click.echo(click.style("Paired ", fg='blue') + click.style(str(paired), fg='cyan') +
                   click.style(" unpaired likes", fg='blue'))
        remaining = auditor.audit()
        if remaining:
            click.echo(click.style(f"{len(remaining)} problems need manual attention; run `index audit`", fg='yellow'))
