import logging

from .util import isptr, isoutput

logger = logging.getLogger(__name__)

def resolve_item(item, ctx):
	args = item.args
	if isoutput(item.name):
		args = args[:-1] # output parameter, not a referenced input
	for arg in args:
		# only leaf values that look like pointers
		if arg.name in item.values:
			continue
		if isptr(arg.value) and arg.value not in ctx.tops:
			ctx.add_top(arg)
	# nested structs can refer to tops too
	for key in item.values:
		resolve_item(item.values[key], ctx)

# Register every pointer value that needs a declaration before first use,
# depth first in trace order
def resolve(items, ctx):
	for item in items:
		resolve_item(item, ctx)
	logger.debug('%d tops', len(ctx.tops))
	return ctx.tops
