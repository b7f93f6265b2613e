import logging

from .util import call_rx, ParseError

logger = logging.getLogger(__name__)

root_indent = 4

class argument(object):
	__slots__ = ( 'name', 'type', 'value', 'expands' )

	def __init__(self, name, type, value, expands=False):
		self.name = name
		self.type = type
		self.value = value
		self.expands = expands # printed with a trailing colon

	def __repr__(self):
		return 'argument(%s: %s = %s)' % (self.name, self.type, self.value)

# A parsed value tree: the fields of a struct or array printed below an argument.
# Also used as the frame type while parsing.
class node(object):
	def __init__(self, name, indent):
		self.name = name
		self.indent = indent
		self.args = []
		self.values = {} # argument name -> node

	def find(self, name):
		for a in self.args:
			if a.name == name:
				return a
		return None

	# Last value wins for repeated field names on the same level
	def add(self, arg):
		old = self.find(arg.name)
		if old is not None:
			self.args.remove(old)
			self.values.pop(arg.name, None)
		self.args.append(arg)

class call(node):
	def __init__(self, name, params, ret):
		node.__init__(self, name, root_indent)
		self.params = params # names as printed in the call header
		self.ret = ret

	def __repr__(self):
		return 'call(%s(%s) -> %s)' % (self.name, ', '.join(self.params), self.ret)

# Split '<indent><name>: <type> = <value>[:]' into its parts
def tokenize(line, lineno=None):
	body = line.lstrip()
	indent = len(line) - len(body)
	colon = body.find(':')
	if indent == 0 or colon < 1:
		raise ParseError('malformed field line', line, lineno)
	name = body[:colon].rstrip()
	rest = body[colon + 1:]
	eq = rest.find('=')
	if eq == -1 or not rest[:1].isspace() or rest[eq + 1:eq + 2] != ' ':
		raise ParseError('malformed field line', line, lineno)
	type = rest[:eq].strip()
	value = rest[eq + 2:]
	expands = value.endswith(':')
	if expands:
		value = value[:-1]
	if not name or not type or not value:
		raise ParseError('malformed field line', line, lineno)
	return indent, argument(name, type, value, expands)

def fold(stack):
	cur = stack.pop()
	if len(stack) == 0:
		raise ParseError('frame stack underflow closing %s' % cur.name)
	stack[-1].values[cur.name] = cur

def field(stack, line, lineno):
	indent, arg = tokenize(line, lineno)
	if indent > stack[-1].indent:
		if len(stack[-1].args) == 0:
			raise ParseError('nested field without an owning argument', line, lineno)
		stack.append(node(stack[-1].args[-1].name, indent))
	else:
		while indent < stack[-1].indent:
			if len(stack) == 1:
				raise ParseError('frame stack underflow', line, lineno)
			fold(stack)
		if indent != stack[-1].indent:
			raise ParseError('inconsistent indentation', line, lineno)
	stack[-1].add(arg)

def finish(stack):
	if len(stack) < 1:
		raise ParseError('unexpected frame stack length %d' % len(stack))
	while len(stack) > 1:
		fold(stack)
	return stack.pop()

# Parse a trace into a list of root call records, in trace order
def parse(text):
	items = []
	stack = []
	for lineno, line in enumerate(text.splitlines(), 1):
		if stack and line[:1] == ' ':
			field(stack, line, lineno)
			continue
		if stack:
			items.append(finish(stack))
		m = call_rx.match(line)
		if m:
			params = m.group(2).split(', ') if m.group(2) else []
			stack.append(call(m.group(1), params, m.group(3)))
		elif line.strip():
			logger.debug('skipping line %d: %r', lineno, line)
	if stack:
		items.append(finish(stack))
	logger.debug('parsed %d calls', len(items))
	return items
