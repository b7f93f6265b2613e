import logging

from .util import ResolveError

logger = logging.getLogger(__name__)

# Collects the generated statements for a whole trace
class spool(object):
	def __init__(self, ctx):
		self.ctx = ctx
		self.lines = []
		self.names = {} # value tree -> declared variable
		self.scope = {} # raw value -> declared variable, for the current call

	def decl(self, type, name):
		self.lines.append('%s %s = {};' % (type, name))

	def do(self, str):
		self.lines.append(str)

	def value(self, raw):
		return self.ctx.value(raw, self.scope)

	def call_begin(self):
		self.names = {}
		self.scope = {}

	def tops(self):
		for key in self.ctx.tops:
			self.do(self.ctx.tops[key].declaration())

	# Declare the nested value trees of an item, innermost first
	def struct(self, item):
		for key, sub in item.values.items():
			if sub in self.names:
				continue
			self.struct(sub)
			arg = item.find(key)
			if arg is None:
				raise ResolveError("couldn't find %s in args of %s" % (key, item.name))
			vn = self.ctx.varname(key)
			self.names[sub] = vn
			self.decl(arg.type, vn)
			for a in sub.args:
				self.do('%s.%s = %s;' % (vn, a.name, self.value(a.value)))
			# bound after the fields, arrays print their first element at the array's own address
			self.scope[arg.value] = vn

	def call(self, item):
		self.call_begin()
		self.struct(item)
		self.do('%s(%s);' % (item.name, ', '.join([ self.value(a.value) for a in item.args ])))

# Generate all statements. Tops must already have been resolved on ctx.
# If 'only' is given, replay just the calls with those names.
def generate(items, ctx, only=None):
	z = spool(ctx)
	z.tops()
	for item in items:
		if only and item.name not in only:
			continue
		z.call(item)
	logger.debug('generated %d statements', len(z.lines))
	return z.lines

# Statements are generated in full before the first one is handed to the
# sink, so a failing conversion produces no output.
def write(items, ctx, emit, only=None):
	for line in generate(items, ctx, only):
		emit(line)

async def write_async(items, ctx, emit, only=None):
	for line in generate(items, ctx, only):
		await emit(line)
