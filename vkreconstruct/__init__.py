from .util import context, ReconstructError, ParseError, ResolveError
from .parse import parse
from .tops import resolve
from .write import generate, write, write_async

__version__ = '0.1.0'

def convert(text, emit, only=None):
	ctx = context()
	items = parse(text)
	resolve(items, ctx)
	write(items, ctx, emit, only)

async def convert_async(text, emit, only=None):
	ctx = context()
	items = parse(text)
	resolve(items, ctx)
	await write_async(items, ctx, emit, only)
