#!/usr/bin/python3
#
# Turn a Vulkan API dump into C++ statements that replay it
#

import os
import sys
import argparse
import logging

from . import convert, ReconstructError

LOGGER_FORMAT = '%(asctime)s %(levelname)s >>> %(message)s'
logger = logging.getLogger('vkreconstruct')

def args():
	parser = argparse.ArgumentParser(prog='vkreconstruct', description='Reconstruct C++ calls from a Vulkan API trace', allow_abbrev=False)
	parser.add_argument('--file', dest='file', metavar='<file>', help='Trace file to read, default is stdin')
	parser.add_argument('-o', dest='output', metavar='<file>', help='Write statements to this file instead of stdout')
	parser.add_argument('--only', dest='only', metavar='<function>', action='append', help='Only replay calls to this function, may be repeated')
	parser.add_argument('--log-level', dest='debug', default=os.environ.get('VKRECONSTRUCT_DEBUG'), help='Log level, either a name or a number')
	parser.add_argument('--log-file', dest='log', metavar='<logfile>', default=os.environ.get('VKRECONSTRUCT_DEBUG_FILE'), help='Output logs to specified file')
	return parser

def loglevel(value):
	if not value: return logging.WARNING
	if value.isdigit(): return int(value)
	level = logging.getLevelName(value.upper())
	if not isinstance(level, int):
		raise ValueError('unknown log level %s' % value)
	return level

def main(argv=None):
	parser = args()
	opts = parser.parse_args(argv)
	try:
		level = loglevel(opts.debug)
	except ValueError as e:
		parser.error(str(e))
	logging.basicConfig(format=LOGGER_FORMAT, level=level, filename=opts.log)
	logger.setLevel(level)

	if opts.file and opts.file != '-':
		with open(opts.file, 'r') as f:
			text = f.read()
	else:
		text = sys.stdin.read()

	lines = []
	try:
		convert(text, lines.append, only=set(opts.only) if opts.only else None)
	except ReconstructError as e:
		logger.error('%s', e)
		return 1

	if opts.output:
		with open(opts.output, 'w') as out:
			for v in lines:
				print(v, file=out)
	else:
		for v in lines:
			print(v)
	logger.info('%d statements written', len(lines))
	return 0

if __name__ == '__main__':
	sys.exit(main())
