import re
import collections
import logging

logger = logging.getLogger(__name__)

# Function family and the calls whose last parameter is an output parameter
prefix = 'vk'
output_prefixes = ( 'vkCreate', 'vkGet' )

call_rx = re.compile(r'^(%s[^(]+)\(([^)]*)\) returns ([^:]+):$' % prefix)
ptr_rx = re.compile(r'^0x[0-9a-f]+$')
enum_rx = re.compile(r'^[0-9]+ \(([^)]+)\)$') # eg 1 (VK_STRUCTURE_TYPE_APPLICATION_INFO)
const_rx = re.compile(r'^([A-Z][A-Z0-9_]*) \([0-9]+\)$') # eg VK_NULL_HANDLE (0)

class ReconstructError(Exception):
	pass

class ParseError(ReconstructError):
	def __init__(self, msg, line=None, lineno=None):
		self.line = line
		self.lineno = lineno
		if lineno is not None:
			msg = '%s (line %d: %r)' % (msg, lineno, line)
		elif line is not None:
			msg = '%s (%r)' % (msg, line)
		ReconstructError.__init__(self, msg)

class ResolveError(ReconstructError):
	pass

def isptr(value):
	return ptr_rx.match(value) is not None

def isoutput(funcname):
	return funcname.startswith(output_prefixes)

# A deduplicated declaration for a pointer value referenced by address
class top(object):
	__slots__ = ( 'name', 'type', 'value', 'varname' )

	def __init__(self, name, type, value, varname):
		self.name = name
		self.type = type
		self.value = value
		self.varname = varname

	def __repr__(self):
		return 'top(%s = %s)' % (self.varname, self.value)

	def __eq__(self, other):
		if not isinstance(other, top): return NotImplemented
		return (self.name, self.type, self.value, self.varname) == (other.name, other.type, other.value, other.varname)

	def declaration(self):
		return '%s %s = reinterpret_cast<%s>(%s);' % (self.type, self.varname, self.type, self.value)

# State shared by the resolver and the emitter for one conversion
class context(object):
	def __init__(self):
		self.tops = collections.OrderedDict() # raw address -> top
		self.count = 0

	# Unique variable name derived from an argument name, stripping any array subscript
	def varname(self, name):
		br = name.find('[')
		if br != -1:
			name = name[:br]
		self.count += 1
		return '%s_%d' % (name, self.count)

	def add_top(self, arg):
		assert arg.value not in self.tops, 'top %s registered twice' % arg.value
		t = top(arg.name, arg.type, arg.value, self.varname(arg.name))
		self.tops[arg.value] = t
		logger.debug('registered %r for %s', t, arg.name)
		return t

	# Value resolution for a raw argument string. 'scope' maps raw values
	# to variables declared for the current call.
	def value(self, raw, scope):
		if raw in scope:
			return scope[raw]
		if isptr(raw):
			if raw not in self.tops:
				raise ResolveError('pointer %s not found in tops (tops: %s, scope: %s)' % (raw, list(self.tops.keys()), dict(scope)))
			return self.tops[raw].varname
		m = enum_rx.match(raw)
		if m:
			return m.group(1)
		m = const_rx.match(raw)
		if m:
			return m.group(1)
		return raw
