from vkreconstruct import parse, resolve, context

create_then_use = '\n'.join([
	'vkCreateX(pInfo, pOut) returns VkResult:',
	'    pInfo: uint32_t = 1',
	'    pOut: VkX* = 0x40',
	'vkUseX(x, y) returns void:',
	'    x: VkX* = 0x40',
	'    y: uint32_t = 2',
	'',
])

def tops_of(text):
	ctx = context()
	resolve(parse(text), ctx)
	return ctx.tops

def test_output_parameter_excluded():
	tops = tops_of(create_then_use.split('vkUseX')[0])
	assert len(tops) == 0

def test_same_pointer_as_input_registered():
	tops = tops_of(create_then_use)
	assert list(tops.keys()) == ['0x40']
	t = tops['0x40']
	assert (t.name, t.type, t.value, t.varname) == ('x', 'VkX*', '0x40', 'x_1')

def test_get_excludes_last_parameter():
	tops = tops_of('vkGetQueue(device, pQueue) returns void:\n    device: VkDevice = 0x10\n    pQueue: VkQueue* = 0x20\n')
	assert list(tops.keys()) == ['0x10']

def test_deduplicated():
	text = '\n'.join([
		'vkA(device) returns void:',
		'    device: VkDevice = 0x10',
		'vkB(device, other) returns void:',
		'    device: VkDevice = 0x10',
		'    other: VkDevice = 0x11',
	])
	tops = tops_of(text)
	assert [t.varname for t in tops.values()] == ['device_1', 'other_2']

def test_mixed_case_is_not_a_pointer():
	tops = tops_of('vkCmdFoo(buf) returns void:\n    buf: VkBuffer = 0xABCDEF\n')
	assert len(tops) == 0

def test_nested_pointers_after_parent_arguments():
	text = '\n'.join([
		'vkA(a, pInfo, c) returns void:',
		'    a: VkA = 0x1',
		'    pInfo: const VkInfo* = 0x100:',
		'        b: VkB = 0x2',
		'    c: VkC = 0x3',
	])
	tops = tops_of(text)
	# the struct address itself has a value tree and is not a top
	assert list(tops.keys()) == ['0x1', '0x3', '0x2']
	assert [t.varname for t in tops.values()] == ['a_1', 'c_2', 'b_3']

def test_nested_struct_named_like_create_call():
	# nested trees are named after their argument, so no output exclusion applies
	text = '\n'.join([
		'vkQueueSubmit(queue, pSubmits) returns VkResult:',
		'    queue: VkQueue = 0x1',
		'    pSubmits: const VkSubmitInfo* = 0x100:',
		'        pWaitSemaphores: const VkSemaphore* = 0x2',
		'        pCommandBuffers: const VkCommandBuffer* = 0x3',
	])
	tops = tops_of(text)
	assert list(tops.keys()) == ['0x1', '0x2', '0x3']

def test_array_subscript_stripped_from_name():
	text = 'vkA(pBuffers[0]) returns void:\n    pBuffers[0]: VkBuffer = 0xbeef\n'
	assert tops_of(text)['0xbeef'].varname == 'pBuffers_1'

def test_resolve_is_deterministic():
	items = parse(create_then_use)
	a = context()
	b = context()
	resolve(items, a)
	resolve(items, b)
	assert list(a.tops.items()) == list(b.tops.items())

def test_resolve_twice_on_same_context_adds_nothing():
	items = parse(create_then_use)
	ctx = context()
	resolve(items, ctx)
	first = list(ctx.tops.items())
	resolve(items, ctx)
	assert list(ctx.tops.items()) == first
