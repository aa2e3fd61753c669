class AsyncBaseJob(object):
    async def run(self):
        try:
            await self._start()
            return await self._execute()
        finally:
            await self._end()

    async def _start(self):
        pass

    async def _execute(self):
        pass

    async def _end(self):
        pass
